from bladeleague.models.db.app_config import AppConfig, BalanceFormat, ScoringSystem
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import BalanceFormatId
from bladeleague.utils.logging import logger


async def add_balance_format(store: EntityStore, name: str) -> BalanceFormat | None:
    balance_format = await store.create_balance_format(name)
    if balance_format is not None:
        logger.info(f"Added balance format {balance_format.name}")
    return balance_format


async def remove_balance_format(
    store: EntityStore, balance_format_id: BalanceFormatId
) -> AppConfig | None:
    app_config = await store.get_config()
    if app_config.get_balance_format(balance_format_id) is None:
        logger.info(f"Not removing balance format {balance_format_id}, it does not exist")
        return None

    updated = app_config.model_copy(
        update={
            "balance_formats": [
                fmt for fmt in app_config.balance_formats if fmt.id != balance_format_id
            ]
        }
    )
    await store.update_config(updated)
    return updated


async def update_scoring_system(store: EntityStore, scoring_system: ScoringSystem) -> AppConfig:
    app_config = await store.get_config()
    updated = app_config.model_copy(update={"scoring_system": scoring_system})
    await store.update_config(updated)
    return updated
