import time
from collections.abc import Iterable, Sequence

from bladeleague.logic.ranking.standings import calculate_winrate
from bladeleague.models.db.match import Match
from bladeleague.models.db.participant import ParticipantRecord
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import ParticipantId
from bladeleague.utils.logging import logger

_RECORDS_RECALC_WARN_MS = 3_000


def calculate_participant_record(
    participant_id: ParticipantId, matches: Iterable[Match]
) -> ParticipantRecord:
    total_matches = 0
    wins = 0
    for match in matches:
        if not match.is_played or not match.involves(participant_id):
            continue

        total_matches += 1
        if match.winner_id == participant_id:
            wins += 1

    return ParticipantRecord(
        total_matches=total_matches,
        wins=wins,
        winrate=calculate_winrate(wins, total_matches),
    )


async def recalculate_participant_records(
    store: EntityStore, participant_ids: Sequence[ParticipantId]
) -> int:
    """
    Recompute the cached lifetime record of the given participants from every played match in
    the store. Returns the duration in milliseconds.
    """
    started_at = time.monotonic()
    matches = await store.list_matches()

    for participant_id in dict.fromkeys(participant_ids):
        await store.update_participant_record(
            participant_id, calculate_participant_record(participant_id, matches)
        )

    duration_ms = int((time.monotonic() - started_at) * 1000)
    if duration_ms > _RECORDS_RECALC_WARN_MS:
        logger.warning(
            f"Recalculating records of {len(participant_ids)} participants took {duration_ms}ms"
        )
    return duration_ms


async def recalculate_all_participant_records(store: EntityStore) -> int:
    participants = await store.list_participants()
    return await recalculate_participant_records(
        store, [participant.id for participant in participants]
    )
