import re

import pytest
from fastapi import HTTPException

from bladeleague.logic.matches import resolve_match
from bladeleague.logic.scheduling.playoffs import (
    determine_playoff_matches,
    generate_playoffs,
    get_playoff_qualifiers,
)
from bladeleague.logic.scheduling.round_robin import regenerate_group_schedule
from bladeleague.logic.scheduling.structure import toggle_playoffs
from bladeleague.models.db.match import MatchPhase, PlayoffRound
from bladeleague.models.db.tournament import TournamentStructure
from bladeleague.models.standings import StandingsRow
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_MOCK_TIME, make_dummy_tournament
from bladeleague.utils.id_types import ParticipantId, TournamentId
from bladeleague.utils.types import assert_some
from tests.shared import create_participants, create_tournament_with_participants


def _seeds(count: int) -> list[ParticipantId]:
    return [ParticipantId(i) for i in range(1, count + 1)]


def test_bracket_sizes() -> None:
    assert PlayoffRound.FINAL.bracket_size == 2
    assert PlayoffRound.SEMI_FINAL.bracket_size == 4
    assert PlayoffRound.QUARTER_FINAL.bracket_size == 8
    assert PlayoffRound.ROUND_OF_16.bracket_size == 16


def test_quarter_final_pairs_best_against_worst() -> None:
    tournament = make_dummy_tournament(_seeds(8), TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS)
    matches = determine_playoff_matches(
        _seeds(8), PlayoffRound.QUARTER_FINAL, tournament, DUMMY_MOCK_TIME
    )

    assert [(match.participant1_id, match.participant2_id) for match in matches] == [
        (1, 8),
        (2, 7),
        (3, 6),
        (4, 5),
    ]
    for match in matches:
        assert match.phase is MatchPhase.PLAYOFF
        assert match.round_label == "Quarter Final"
        assert match.tournament_id == tournament.id
        assert match.is_played is False


def test_only_top_seeds_qualify() -> None:
    tournament = make_dummy_tournament(_seeds(6), TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS)
    matches = determine_playoff_matches(
        _seeds(6), PlayoffRound.SEMI_FINAL, tournament, DUMMY_MOCK_TIME
    )

    assert [(match.participant1_id, match.participant2_id) for match in matches] == [
        (1, 4),
        (2, 3),
    ]


def test_too_few_qualifiers_are_rejected() -> None:
    tournament = make_dummy_tournament(_seeds(6), TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS)

    err_msg = re.escape("400: Quarter Final needs at least 8 qualifiers, only 6 available")
    with pytest.raises(HTTPException, match=err_msg):
        determine_playoff_matches(
            _seeds(6), PlayoffRound.QUARTER_FINAL, tournament, DUMMY_MOCK_TIME
        )


def test_qualifiers_follow_standings_when_groups_are_played() -> None:
    tournament = make_dummy_tournament(_seeds(3), TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS)
    standings = [
        StandingsRow(participant_id=ParticipantId(3), name="C"),
        StandingsRow(participant_id=ParticipantId(1), name="A"),
        StandingsRow(participant_id=ParticipantId(2), name="B"),
    ]

    assert get_playoff_qualifiers(tournament, standings) == [3, 1, 2]


def test_playoff_only_qualifiers_are_a_seeded_shuffle() -> None:
    tournament = make_dummy_tournament(_seeds(8), TournamentStructure.PLAYOFF_ONLY)

    first = get_playoff_qualifiers(tournament, [], seed=7)
    second = get_playoff_qualifiers(tournament, [], seed=7)

    assert first == second
    assert sorted(first) == _seeds(8)
    assert tournament.participant_ids == _seeds(8)


@pytest.mark.asyncio
async def test_generate_playoffs_from_group_standings(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 4)
    tournament = await create_tournament_with_participants(
        store, participants, TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS
    )
    await regenerate_group_schedule(store, tournament.id)

    # Lower ids always win, so the standings follow the roster order.
    for match in await store.list_matches(tournament_id=tournament.id):
        if match.participant1_id < match.participant2_id:
            await resolve_match(store, match.id, 2, 0)
        else:
            await resolve_match(store, match.id, 0, 2)

    created = assert_some(await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL))

    ids = [participant.id for participant in participants]
    assert [(match.participant1_id, match.participant2_id) for match in created] == [
        (ids[0], ids[3]),
        (ids[1], ids[2]),
    ]
    assert all(match.is_playoff_match() for match in created)

    with pytest.raises(HTTPException, match="Playoffs have already been generated"):
        await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL)


@pytest.mark.asyncio
async def test_generate_playoffs_for_playoff_only_tournament(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 8)
    tournament = await create_tournament_with_participants(
        store, participants, TournamentStructure.PLAYOFF_ONLY
    )

    created = assert_some(
        await generate_playoffs(store, tournament.id, PlayoffRound.QUARTER_FINAL, seed=3)
    )

    expected_order = get_playoff_qualifiers(tournament, [], seed=3)
    assert [(match.participant1_id, match.participant2_id) for match in created] == [
        (expected_order[i], expected_order[7 - i]) for i in range(4)
    ]


@pytest.mark.asyncio
async def test_generate_playoffs_requires_playoff_phase(store: InMemoryEntityStore) -> None:
    participants = await create_participants(store, 4)
    tournament = await create_tournament_with_participants(store, participants)

    with pytest.raises(HTTPException, match="Playoffs are disabled"):
        await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL)

    await toggle_playoffs(store, tournament.id)
    assert await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL) is not None


@pytest.mark.asyncio
async def test_generate_playoffs_with_too_few_participants_writes_nothing(
    store: InMemoryEntityStore,
) -> None:
    participants = await create_participants(store, 3)
    tournament = await create_tournament_with_participants(
        store, participants, TournamentStructure.PLAYOFF_ONLY
    )

    with pytest.raises(HTTPException, match="needs at least 4 qualifiers"):
        await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL)

    assert await store.list_matches(tournament_id=tournament.id) == []


@pytest.mark.asyncio
async def test_generate_playoffs_unknown_tournament(store: InMemoryEntityStore) -> None:
    assert await generate_playoffs(store, TournamentId(123), PlayoffRound.FINAL) is None
