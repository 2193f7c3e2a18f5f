from collections.abc import Sequence

from databases import Database
from heliclockter import datetime_utc

from bladeleague.models.db.match import Match, MatchCreateBody
from bladeleague.schema import matches
from bladeleague.utils.id_types import LeagueId, MatchId, ParticipantId, TournamentId
from bladeleague.utils.types import assert_some, dict_without_none


async def sql_get_matches(
    database: Database,
    *,
    tournament_id: TournamentId | None = None,
    league_id: LeagueId | None = None,
) -> list[Match]:
    tournament_filter = "AND tournament_id = :tournament_id" if tournament_id is not None else ""
    league_filter = "AND league_id = :league_id" if league_id is not None else ""
    query = f"""
        SELECT *
        FROM matches
        WHERE 1 = 1
        {tournament_filter}
        {league_filter}
        ORDER BY id
    """
    result = await database.fetch_all(
        query=query,
        values=dict_without_none({"tournament_id": tournament_id, "league_id": league_id}),
    )
    return [Match.model_validate(dict(row._mapping)) for row in result]


async def sql_get_match(database: Database, match_id: MatchId) -> Match | None:
    query = """
        SELECT *
        FROM matches
        WHERE id = :match_id
    """
    result = await database.fetch_one(query=query, values={"match_id": match_id})
    return Match.model_validate(dict(result._mapping)) if result is not None else None


async def sql_create_match(database: Database, match: MatchCreateBody) -> Match:
    query = """
        INSERT INTO matches (
            league_id,
            tournament_id,
            participant1_id,
            participant2_id,
            participant1_score,
            participant2_score,
            winner_id,
            is_played,
            date,
            phase,
            round_label
        )
        VALUES (
            :league_id,
            :tournament_id,
            :participant1_id,
            :participant2_id,
            :participant1_score,
            :participant2_score,
            :winner_id,
            :is_played,
            :date,
            :phase,
            :round_label
        )
        RETURNING *
    """
    result = await database.fetch_one(query=query, values=match.model_dump(mode="json"))
    return Match.model_validate(dict(assert_some(result)._mapping))


async def sql_create_matches(
    database: Database, matches_to_create: Sequence[MatchCreateBody]
) -> list[Match]:
    async with database.transaction():
        return [await sql_create_match(database, match) for match in matches_to_create]


async def sql_delete_matches(database: Database, match_ids: Sequence[MatchId]) -> None:
    if len(match_ids) < 1:
        return

    await database.execute(query=matches.delete().where(matches.c.id.in_(match_ids)))


async def sql_resolve_match(
    database: Database,
    match_id: MatchId,
    participant1_score: int,
    participant2_score: int,
    winner_id: ParticipantId,
) -> None:
    query = """
        UPDATE matches
        SET participant1_score = :participant1_score,
            participant2_score = :participant2_score,
            winner_id = :winner_id,
            is_played = :is_played,
            date = :date
        WHERE id = :match_id
    """
    await database.execute(
        query=query,
        values={
            "participant1_score": participant1_score,
            "participant2_score": participant2_score,
            "winner_id": winner_id,
            "is_played": True,
            "date": datetime_utc.now().isoformat(),
            "match_id": match_id,
        },
    )
