import pytest

from bladeleague.logic.configuration import (
    add_balance_format,
    remove_balance_format,
    update_scoring_system,
)
from bladeleague.models.db.app_config import ScoringSystem
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_BALANCE_FORMAT
from bladeleague.utils.id_types import BalanceFormatId
from bladeleague.utils.types import assert_some


@pytest.mark.asyncio
async def test_add_and_remove_balance_format(store: InMemoryEntityStore) -> None:
    extreme = assert_some(await add_balance_format(store, "Extreme"))
    assert await add_balance_format(store, "EXTREME") is None

    updated = assert_some(await remove_balance_format(store, DUMMY_BALANCE_FORMAT.id))

    assert updated.balance_formats == [extreme]
    assert (await store.get_config()).balance_formats == [extreme]
    assert await remove_balance_format(store, BalanceFormatId(999)) is None


@pytest.mark.asyncio
async def test_update_scoring_system_keeps_balance_formats(store: InMemoryEntityStore) -> None:
    updated = await update_scoring_system(store, ScoringSystem(win=3, loss=0.5))

    assert updated.scoring_system == ScoringSystem(win=3, loss=0.5)
    assert updated.balance_formats == [DUMMY_BALANCE_FORMAT]
    assert (await store.get_config()).scoring_system.win == 3


@pytest.mark.asyncio
async def test_default_config_has_no_balance_formats() -> None:
    app_config = await InMemoryEntityStore().get_config()

    assert app_config.balance_formats == []
    assert app_config.scoring_system == ScoringSystem(win=2, loss=1)
