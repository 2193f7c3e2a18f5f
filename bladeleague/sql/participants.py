from databases import Database
from heliclockter import datetime_utc

from bladeleague.models.db.participant import (
    Participant,
    ParticipantInsertable,
    ParticipantRecord,
)
from bladeleague.models.db.shared import get_name_key
from bladeleague.utils.id_types import ParticipantId


async def sql_get_participants(database: Database) -> list[Participant]:
    query = """
        SELECT *
        FROM participants
        ORDER BY id
    """
    result = await database.fetch_all(query=query)
    return [Participant.model_validate(dict(row._mapping)) for row in result]


async def sql_get_participant(
    database: Database, participant_id: ParticipantId
) -> Participant | None:
    query = """
        SELECT *
        FROM participants
        WHERE id = :participant_id
    """
    result = await database.fetch_one(query=query, values={"participant_id": participant_id})
    return Participant.model_validate(dict(result._mapping)) if result is not None else None


async def sql_get_participant_by_name(database: Database, name: str) -> Participant | None:
    query = """
        SELECT *
        FROM participants
        WHERE name_key = :name_key
    """
    result = await database.fetch_one(query=query, values={"name_key": get_name_key(name)})
    return Participant.model_validate(dict(result._mapping)) if result is not None else None


async def sql_create_participant(database: Database, name: str) -> Participant | None:
    query = """
        INSERT INTO participants (name, name_key, created, total_matches, wins, winrate)
        VALUES (:name, :name_key, :created, :total_matches, :wins, :winrate)
        ON CONFLICT DO NOTHING
        RETURNING *
    """
    participant = ParticipantInsertable(name=name.strip(), created=datetime_utc.now())
    result = await database.fetch_one(
        query=query,
        values={**participant.model_dump(mode="json"), "name_key": get_name_key(name)},
    )
    return Participant.model_validate(dict(result._mapping)) if result is not None else None


async def sql_update_participant_record(
    database: Database, participant_id: ParticipantId, record: ParticipantRecord
) -> None:
    query = """
        UPDATE participants
        SET total_matches = :total_matches,
            wins = :wins,
            winrate = :winrate
        WHERE id = :participant_id
    """
    await database.execute(
        query=query, values={**record.model_dump(), "participant_id": participant_id}
    )
