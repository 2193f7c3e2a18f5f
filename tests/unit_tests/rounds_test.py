import pytest

from bladeleague.logic.planning.rounds import (
    OTHER_FALLBACK_LABEL,
    PLAYOFF_FALLBACK_LABEL,
    get_round_label,
    get_tournament_rounds,
    group_matches_by_round,
)
from bladeleague.logic.scheduling.round_robin import regenerate_group_schedule
from bladeleague.models.db.match import MatchPhase
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import make_dummy_played_match
from bladeleague.utils.id_types import TournamentId
from bladeleague.utils.types import assert_some
from tests.shared import create_participants, create_tournament_with_participants


def test_round_label_fallbacks() -> None:
    group_match = make_dummy_played_match(1, 1, 2)
    playoff_match = make_dummy_played_match(2, 1, 2, phase=MatchPhase.PLAYOFF)
    legacy_match = make_dummy_played_match(3, 1, 2, phase=None)

    assert get_round_label(group_match) == OTHER_FALLBACK_LABEL
    assert get_round_label(legacy_match) == OTHER_FALLBACK_LABEL
    assert get_round_label(playoff_match) == PLAYOFF_FALLBACK_LABEL
    assert get_round_label(playoff_match.model_copy(update={"round_label": "Final"})) == "Final"


def test_group_rounds_sort_numerically_before_other_labels() -> None:
    labels = ["Semi Final", "Jornada 10", "Jornada 2", None, "Final", "Jornada 1"]
    matches = [
        make_dummy_played_match(i, 1, 2).model_copy(update={"round_label": label})
        for i, label in enumerate(labels)
    ]

    rounds = group_matches_by_round(matches)

    assert [match_round.label for match_round in rounds] == [
        "Jornada 1",
        "Jornada 2",
        "Jornada 10",
        "Semi Final",
        OTHER_FALLBACK_LABEL,
        "Final",
    ]
    assert [match.id for match in rounds[2].matches] == [1]


@pytest.mark.asyncio
async def test_get_tournament_rounds(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 4)
    tournament = await create_tournament_with_participants(store, participants)
    await regenerate_group_schedule(store, tournament.id)

    rounds = assert_some(await get_tournament_rounds(store, tournament.id))

    assert [match_round.label for match_round in rounds] == [
        "Jornada 1",
        "Jornada 2",
        "Jornada 3",
    ]
    assert all(len(match_round.matches) == 2 for match_round in rounds)
    assert await get_tournament_rounds(store, TournamentId(404)) is None
