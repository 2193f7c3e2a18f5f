from collections import defaultdict
from collections.abc import Sequence

from databases import Database
from databases.interfaces import Record
from heliclockter import datetime_utc
from sqlalchemy import select

from bladeleague.models.db.league import League, LeagueInsertable
from bladeleague.models.db.shared import get_name_key
from bladeleague.schema import league_participants, tournaments
from bladeleague.utils.id_types import LeagueId, ParticipantId, TournamentId


async def _get_league_links(
    database: Database, league_ids: Sequence[LeagueId]
) -> tuple[dict[LeagueId, list[ParticipantId]], dict[LeagueId, list[TournamentId]]]:
    participant_ids: dict[LeagueId, list[ParticipantId]] = defaultdict(list)
    tournament_ids: dict[LeagueId, list[TournamentId]] = defaultdict(list)
    if len(league_ids) < 1:
        return participant_ids, tournament_ids

    participant_rows = await database.fetch_all(
        query=select(league_participants.c.league_id, league_participants.c.participant_id)
        .where(league_participants.c.league_id.in_(league_ids))
        .order_by(league_participants.c.id)
    )
    for row in participant_rows:
        participant_ids[LeagueId(row._mapping["league_id"])].append(
            ParticipantId(row._mapping["participant_id"])
        )

    tournament_rows = await database.fetch_all(
        query=select(tournaments.c.league_id, tournaments.c.id)
        .where(tournaments.c.league_id.in_(league_ids))
        .order_by(tournaments.c.id)
    )
    for row in tournament_rows:
        tournament_ids[LeagueId(row._mapping["league_id"])].append(TournamentId(row._mapping["id"]))

    return participant_ids, tournament_ids


async def _to_leagues(database: Database, rows: Sequence[Record]) -> list[League]:
    league_ids = [LeagueId(row._mapping["id"]) for row in rows]
    participant_ids, tournament_ids = await _get_league_links(database, league_ids)
    return [
        League.model_validate(
            {
                **dict(row._mapping),
                "participant_ids": participant_ids[league_id],
                "tournament_ids": tournament_ids[league_id],
            }
        )
        for row, league_id in zip(rows, league_ids, strict=True)
    ]


async def sql_get_leagues(database: Database) -> list[League]:
    query = """
        SELECT *
        FROM leagues
        ORDER BY id
    """
    return await _to_leagues(database, await database.fetch_all(query=query))


async def sql_get_league(database: Database, league_id: LeagueId) -> League | None:
    query = """
        SELECT *
        FROM leagues
        WHERE id = :league_id
    """
    result = await database.fetch_one(query=query, values={"league_id": league_id})
    if result is None:
        return None

    leagues = await _to_leagues(database, [result])
    return leagues[0]


async def sql_create_league(database: Database, name: str) -> League | None:
    query = """
        INSERT INTO leagues (name, name_key, created)
        VALUES (:name, :name_key, :created)
        ON CONFLICT DO NOTHING
        RETURNING *
    """
    league = LeagueInsertable(name=name.strip(), created=datetime_utc.now())
    result = await database.fetch_one(
        query=query, values={**league.model_dump(mode="json"), "name_key": get_name_key(name)}
    )
    if result is None:
        return None

    return League.model_validate(dict(result._mapping))


async def sql_add_league_participants(
    database: Database, league_id: LeagueId, participant_ids: Sequence[ParticipantId]
) -> None:
    league = await sql_get_league(database, league_id)
    if league is None:
        return

    missing = [
        participant_id
        for participant_id in dict.fromkeys(participant_ids)
        if participant_id not in league.participant_ids
    ]
    if len(missing) < 1:
        return

    query = """
        INSERT INTO league_participants (league_id, participant_id)
        VALUES (:league_id, :participant_id)
    """
    async with database.transaction():
        await database.execute_many(
            query=query,
            values=[
                {"league_id": league_id, "participant_id": participant_id}
                for participant_id in missing
            ],
        )
