import pytest
from pydantic import ValidationError

from bladeleague.models.db.blade import BladeBody, BladeTier
from bladeleague.models.db.match import MatchCreateBody
from bladeleague.models.db.participant import ParticipantRecord
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_MOCK_TIME
from bladeleague.utils.id_types import ParticipantId
from bladeleague.utils.types import assert_some


@pytest.mark.asyncio
async def test_names_are_unique_case_insensitively(store: InMemoryEntityStore) -> None:
    assert await store.create_participant("Valt") is not None
    assert await store.create_participant(" VALT ") is None
    assert await store.create_participant("Ángel") is not None
    assert await store.create_participant("ÁNGEL") is None
    assert await store.get_participant_by_name("ángel") is not None

    assert await store.create_league("Masters") is not None
    assert await store.create_league("masters") is None
    assert await store.create_league("Straße Liga") is not None
    assert await store.create_league("STRASSE LIGA") is None

    assert await store.create_balance_format("standard") is None
    assert await store.create_blade(BladeBody(name="Valkyrie")) is not None
    assert await store.create_blade(BladeBody(name="valkyrie", tier=BladeTier.S)) is None

    assert len(await store.list_participants()) == 2
    assert len(await store.list_leagues()) == 2


@pytest.mark.asyncio
async def test_store_hands_out_copies(store: InMemoryEntityStore) -> None:
    league = assert_some(await store.create_league("Masters"))
    league.participant_ids.append(ParticipantId(1))

    assert assert_some(await store.get_league(league.id)).participant_ids == []

    app_config = await store.get_config()
    app_config.balance_formats.clear()
    assert len((await store.get_config()).balance_formats) == 1


@pytest.mark.asyncio
async def test_new_balance_formats_get_fresh_ids(store: InMemoryEntityStore) -> None:
    balance_format = assert_some(await store.create_balance_format("Extreme"))

    app_config = await store.get_config()
    assert [fmt.name for fmt in app_config.balance_formats] == ["Standard", "Extreme"]
    assert len({fmt.id for fmt in app_config.balance_formats}) == 2
    assert app_config.get_balance_format(balance_format.id) == balance_format


@pytest.mark.asyncio
async def test_match_lifecycle(store: InMemoryEntityStore) -> None:
    first = assert_some(await store.create_participant("A"))
    second = assert_some(await store.create_participant("B"))

    [match] = await store.bulk_create_matches(
        [
            MatchCreateBody(
                participant1_id=first.id, participant2_id=second.id, date=DUMMY_MOCK_TIME
            )
        ]
    )
    resolved = assert_some(await store.resolve_match(match.id, 1, 3, second.id))

    assert resolved.is_played is True
    assert resolved.winner_id == second.id
    assert resolved.date > DUMMY_MOCK_TIME

    await store.update_participant_record(
        second.id, ParticipantRecord(total_matches=1, wins=1, winrate=100)
    )
    assert assert_some(await store.get_participant(second.id)).winrate == 100

    await store.delete_matches([match.id])
    assert await store.get_match(match.id) is None
    assert await store.resolve_match(match.id, 1, 0, first.id) is None


def test_match_needs_two_different_participants() -> None:
    with pytest.raises(ValidationError, match="two different participants"):
        MatchCreateBody(
            participant1_id=ParticipantId(1),
            participant2_id=ParticipantId(1),
            date=DUMMY_MOCK_TIME,
        )
