from fastapi import APIRouter, Depends

from bladeleague.config import config
from bladeleague.models.db.blade import BladeBody
from bladeleague.routes.models import BladesResponse, SingleBladeResponse
from bladeleague.routes.util import get_entity_store, raise_conflict
from bladeleague.store.base import EntityStore

router = APIRouter(prefix=config.api_prefix)


@router.get("/blades", response_model=BladesResponse)
async def get_blades(store: EntityStore = Depends(get_entity_store)) -> BladesResponse:
    return BladesResponse(data=await store.list_blades())


@router.post("/blades", response_model=SingleBladeResponse)
async def create_blade(
    blade_body: BladeBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleBladeResponse:
    blade = await store.create_blade(blade_body)
    if blade is None:
        raise_conflict("blade")

    return SingleBladeResponse(data=blade)
