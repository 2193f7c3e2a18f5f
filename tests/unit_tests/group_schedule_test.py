import re

import pytest
from fastapi import HTTPException

from bladeleague.logic.matches import resolve_match
from bladeleague.logic.rosters import add_participant_to_tournament
from bladeleague.logic.scheduling.playoffs import generate_playoffs
from bladeleague.logic.scheduling.round_robin import (
    determine_group_schedule_update,
    regenerate_group_schedule,
)
from bladeleague.models.db.match import Match, MatchPhase, PlayoffRound
from bladeleague.models.db.tournament import TournamentStructure
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import (
    DUMMY_MOCK_TIME,
    make_dummy_played_match,
    make_dummy_tournament,
)
from bladeleague.utils.id_types import MatchId, ParticipantId, TournamentId
from bladeleague.utils.types import assert_some
from tests.shared import create_participants, create_tournament_with_participants


def _unplayed_group_match(match_id: int, participant1: int, participant2: int) -> Match:
    return Match(
        id=MatchId(match_id),
        participant1_id=ParticipantId(participant1),
        participant2_id=ParticipantId(participant2),
        date=DUMMY_MOCK_TIME,
        phase=MatchPhase.GROUP,
    )


def test_schedule_update_keeps_played_pairs_and_drops_unplayed_matches() -> None:
    roster = [ParticipantId(i) for i in range(1, 5)]
    tournament = make_dummy_tournament(roster)
    existing = [
        make_dummy_played_match(100, winner=2, loser=1),
        _unplayed_group_match(101, 3, 4),
        make_dummy_played_match(102, winner=1, loser=4, phase=None),
    ]

    update = determine_group_schedule_update(roster, existing, tournament, DUMMY_MOCK_TIME)

    assert update.matches_to_delete == [MatchId(101)]
    created_pairs = {
        frozenset((match.participant1_id, match.participant2_id))
        for match in update.matches_to_create
    }
    assert len(update.matches_to_create) == 4
    assert frozenset((ParticipantId(1), ParticipantId(2))) not in created_pairs
    assert frozenset((ParticipantId(1), ParticipantId(4))) not in created_pairs
    assert frozenset((ParticipantId(3), ParticipantId(4))) in created_pairs


def test_schedule_update_ignores_playoff_matches() -> None:
    roster = [ParticipantId(1), ParticipantId(2)]
    tournament = make_dummy_tournament(roster)
    playoff_match = make_dummy_played_match(5, winner=1, loser=2, phase=MatchPhase.PLAYOFF)

    update = determine_group_schedule_update(roster, [playoff_match], tournament, DUMMY_MOCK_TIME)

    assert update.matches_to_delete == []
    assert len(update.matches_to_create) == 1


@pytest.mark.asyncio
async def test_regenerate_after_adding_participant_keeps_played_results(
    store: InMemoryEntityStore,
) -> None:
    participants = await create_participants(store, 5)
    tournament = await create_tournament_with_participants(store, participants[:4])

    await regenerate_group_schedule(store, tournament.id)
    initial_matches = await store.list_matches(tournament_id=tournament.id)
    assert len(initial_matches) == 6

    played = []
    for match in initial_matches[:2]:
        played.append(assert_some(await resolve_match(store, match.id, 3, 1)))

    await add_participant_to_tournament(store, tournament.id, participants[4].id)
    update = assert_some(await regenerate_group_schedule(store, tournament.id))

    assert len(update.matches_to_delete) == 4
    assert len(update.matches_to_create) == 8

    matches = await store.list_matches(tournament_id=tournament.id)
    assert len(matches) == 10
    assert len({match.get_pairing_key() for match in matches}) == 10
    for played_match in played:
        assert played_match in matches


@pytest.mark.asyncio
async def test_regenerate_requires_two_participants(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 1)
    tournament = await create_tournament_with_participants(store, participants)

    err_msg = re.escape("400: At least 2 participants are required to generate a schedule")
    with pytest.raises(HTTPException, match=err_msg):
        await regenerate_group_schedule(store, tournament.id)

    assert await store.list_matches(tournament_id=tournament.id) == []


@pytest.mark.asyncio
async def test_regenerate_requires_group_phase(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 4)
    tournament = await create_tournament_with_participants(
        store, participants, TournamentStructure.PLAYOFF_ONLY
    )

    with pytest.raises(HTTPException, match="Tournament has no group phase"):
        await regenerate_group_schedule(store, tournament.id)


@pytest.mark.asyncio
async def test_regenerate_is_rejected_once_playoffs_exist(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 4)
    tournament = await create_tournament_with_participants(
        store, participants, TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS
    )
    await regenerate_group_schedule(store, tournament.id)
    await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL)

    with pytest.raises(HTTPException, match="after playoffs have been generated"):
        await regenerate_group_schedule(store, tournament.id)


@pytest.mark.asyncio
async def test_regenerate_unknown_tournament_is_a_no_op(store: InMemoryEntityStore) -> None:
    assert await regenerate_group_schedule(store, TournamentId(999)) is None
