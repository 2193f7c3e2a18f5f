from fastapi import APIRouter, Depends, Query

from bladeleague.config import config
from bladeleague.logic.ranking.standings import get_standings
from bladeleague.models.standings import StandingsScope
from bladeleague.routes.models import StandingsResponse
from bladeleague.routes.util import get_entity_store, raise_not_found
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import BalanceFormatId, LeagueId

router = APIRouter(prefix=config.api_prefix)


@router.get("/standings", response_model=StandingsResponse)
async def get_standings_table(
    scope: StandingsScope = StandingsScope.ALL,
    league_id: LeagueId | None = None,
    balance_format_ids: list[BalanceFormatId] = Query(default=[]),
    store: EntityStore = Depends(get_entity_store),
) -> StandingsResponse:
    standings = await get_standings(
        store, scope, league_id=league_id, balance_format_ids=balance_format_ids
    )
    if standings is None:
        raise_not_found("league")

    return StandingsResponse(data=standings)
