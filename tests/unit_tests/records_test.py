import pytest

from bladeleague.logic.ranking.records import (
    calculate_participant_record,
    recalculate_all_participant_records,
)
from bladeleague.models.db.match import MatchCreateBody
from bladeleague.models.db.participant import ParticipantRecord
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_MOCK_TIME, make_dummy_played_match
from bladeleague.utils.id_types import ParticipantId
from bladeleague.utils.types import assert_some
from tests.shared import create_participants


def test_calculate_participant_record() -> None:
    matches = [
        make_dummy_played_match(1, winner=1, loser=2),
        make_dummy_played_match(2, winner=3, loser=1),
        make_dummy_played_match(3, winner=1, loser=3),
        make_dummy_played_match(4, winner=2, loser=3),
        make_dummy_played_match(5, winner=1, loser=2).model_copy(
            update={"is_played": False, "winner_id": None}
        ),
    ]

    assert calculate_participant_record(ParticipantId(1), matches) == ParticipantRecord(
        total_matches=3, wins=2, winrate=67
    )
    assert calculate_participant_record(ParticipantId(3), matches) == ParticipantRecord(
        total_matches=3, wins=1, winrate=33
    )
    assert calculate_participant_record(ParticipantId(4), matches) == ParticipantRecord()


@pytest.mark.asyncio
async def test_recalculate_all_participant_records(store: InMemoryEntityStore) -> None:
    first, second, idle = await create_participants(store, 3)
    for winner, loser in ((first, second), (first, second), (second, first), (first, second)):
        await store.create_match(
            MatchCreateBody(
                participant1_id=winner.id,
                participant2_id=loser.id,
                participant1_score=3,
                participant2_score=1,
                winner_id=winner.id,
                is_played=True,
                date=DUMMY_MOCK_TIME,
            )
        )

    await recalculate_all_participant_records(store)

    first = assert_some(await store.get_participant(first.id))
    assert (first.total_matches, first.wins, first.winrate) == (4, 3, 75)
    assert assert_some(await store.get_participant(second.id)).winrate == 25
    idle = assert_some(await store.get_participant(idle.id))
    assert (idle.total_matches, idle.wins, idle.winrate) == (0, 0, 0)
