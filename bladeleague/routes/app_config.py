from fastapi import APIRouter, Depends

from bladeleague.config import config
from bladeleague.logic.configuration import (
    add_balance_format,
    remove_balance_format,
    update_scoring_system,
)
from bladeleague.models.db.app_config import BalanceFormatBody, ScoringSystem
from bladeleague.routes.models import AppConfigResponse, SingleBalanceFormatResponse
from bladeleague.routes.util import get_entity_store, raise_conflict, raise_not_found
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import BalanceFormatId

router = APIRouter(prefix=config.api_prefix)


@router.get("/config", response_model=AppConfigResponse)
async def get_app_config(store: EntityStore = Depends(get_entity_store)) -> AppConfigResponse:
    return AppConfigResponse(data=await store.get_config())


@router.post("/config/balance_formats", response_model=SingleBalanceFormatResponse)
async def create_balance_format(
    balance_format_body: BalanceFormatBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleBalanceFormatResponse:
    balance_format = await add_balance_format(store, balance_format_body.name)
    if balance_format is None:
        raise_conflict("balance format")

    return SingleBalanceFormatResponse(data=balance_format)


@router.delete("/config/balance_formats/{balance_format_id}", response_model=AppConfigResponse)
async def delete_balance_format(
    balance_format_id: BalanceFormatId,
    store: EntityStore = Depends(get_entity_store),
) -> AppConfigResponse:
    app_config = await remove_balance_format(store, balance_format_id)
    if app_config is None:
        raise_not_found("balance format")

    return AppConfigResponse(data=app_config)


@router.put("/config/scoring_system", response_model=AppConfigResponse)
async def put_scoring_system(
    scoring_system: ScoringSystem,
    store: EntityStore = Depends(get_entity_store),
) -> AppConfigResponse:
    return AppConfigResponse(data=await update_scoring_system(store, scoring_system))
