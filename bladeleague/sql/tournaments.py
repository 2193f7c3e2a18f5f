from collections import defaultdict
from collections.abc import Sequence

from databases import Database
from databases.interfaces import Record
from sqlalchemy import select

from bladeleague.models.db.shared import get_name_key
from bladeleague.models.db.tournament import (
    Tournament,
    TournamentInsertable,
    TournamentStatus,
    TournamentStructure,
)
from bladeleague.schema import tournament_participants
from bladeleague.utils.id_types import LeagueId, ParticipantId, TournamentId


async def _to_tournaments(database: Database, rows: Sequence[Record]) -> list[Tournament]:
    tournament_ids = [TournamentId(row._mapping["id"]) for row in rows]
    participant_ids: dict[TournamentId, list[ParticipantId]] = defaultdict(list)
    if len(tournament_ids) > 0:
        participant_rows = await database.fetch_all(
            query=select(
                tournament_participants.c.tournament_id, tournament_participants.c.participant_id
            )
            .where(tournament_participants.c.tournament_id.in_(tournament_ids))
            .order_by(tournament_participants.c.id)
        )
        for row in participant_rows:
            participant_ids[TournamentId(row._mapping["tournament_id"])].append(
                ParticipantId(row._mapping["participant_id"])
            )

    return [
        Tournament.model_validate(
            {**dict(row._mapping), "participant_ids": participant_ids[tournament_id]}
        )
        for row, tournament_id in zip(rows, tournament_ids, strict=True)
    ]


async def sql_get_tournaments(
    database: Database, league_id: LeagueId | None = None
) -> list[Tournament]:
    league_filter = "WHERE league_id = :league_id" if league_id is not None else ""
    query = f"""
        SELECT *
        FROM tournaments
        {league_filter}
        ORDER BY id
    """
    values = {"league_id": league_id} if league_id is not None else None
    return await _to_tournaments(database, await database.fetch_all(query=query, values=values))


async def sql_get_tournament(
    database: Database, tournament_id: TournamentId
) -> Tournament | None:
    query = """
        SELECT *
        FROM tournaments
        WHERE id = :tournament_id
    """
    result = await database.fetch_one(query=query, values={"tournament_id": tournament_id})
    if result is None:
        return None

    tournaments = await _to_tournaments(database, [result])
    return tournaments[0]


async def sql_set_tournament_participants(
    database: Database, tournament_id: TournamentId, participant_ids: Sequence[ParticipantId]
) -> None:
    async with database.transaction():
        await database.execute(
            query="DELETE FROM tournament_participants WHERE tournament_id = :tournament_id",
            values={"tournament_id": tournament_id},
        )
        if len(participant_ids) < 1:
            return

        await database.execute_many(
            query="""
                INSERT INTO tournament_participants (tournament_id, participant_id)
                VALUES (:tournament_id, :participant_id)
            """,
            values=[
                {"tournament_id": tournament_id, "participant_id": participant_id}
                for participant_id in dict.fromkeys(participant_ids)
            ],
        )


async def sql_create_tournament(
    database: Database, tournament: TournamentInsertable
) -> TournamentId | None:
    query = """
        INSERT INTO tournaments (
            name,
            name_key,
            league_id,
            structure,
            balance_format_id,
            status,
            created
        )
        VALUES (
            :name,
            :name_key,
            :league_id,
            :structure,
            :balance_format_id,
            :status,
            :created
        )
        ON CONFLICT DO NOTHING
        RETURNING id
        """
    async with database.transaction():
        new_id = await database.fetch_val(
            query=query,
            values={
                **tournament.model_dump(mode="json", exclude={"participant_ids"}),
                "name": tournament.name.strip(),
                "name_key": get_name_key(tournament.name),
            },
        )
        if new_id is None:
            return None

        tournament_id = TournamentId(new_id)
        await sql_set_tournament_participants(database, tournament_id, tournament.participant_ids)

    return tournament_id


async def sql_update_tournament_structure(
    database: Database, tournament_id: TournamentId, structure: TournamentStructure
) -> None:
    query = "UPDATE tournaments SET structure = :structure WHERE id = :tournament_id"
    await database.execute(
        query=query, values={"structure": structure.value, "tournament_id": tournament_id}
    )


async def sql_update_tournament_status(
    database: Database, tournament_id: TournamentId, status: TournamentStatus
) -> None:
    query = "UPDATE tournaments SET status = :status WHERE id = :tournament_id"
    await database.execute(
        query=query, values={"status": status.value, "tournament_id": tournament_id}
    )
