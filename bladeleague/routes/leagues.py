from fastapi import APIRouter, Depends
from heliclockter import datetime_utc

from bladeleague.config import config
from bladeleague.logic.rosters import list_leagues_newest_first
from bladeleague.models.db.league import LeagueBody
from bladeleague.routes.models import (
    LeaguesResponse,
    MatchesResponse,
    SingleLeagueResponse,
    TournamentsResponse,
)
from bladeleague.routes.util import get_entity_store, raise_conflict, raise_not_found
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import LeagueId

router = APIRouter(prefix=config.api_prefix)


@router.get("/leagues", response_model=LeaguesResponse)
async def get_leagues(
    created_after: datetime_utc | None = None,
    created_before: datetime_utc | None = None,
    store: EntityStore = Depends(get_entity_store),
) -> LeaguesResponse:
    return LeaguesResponse(
        data=await list_leagues_newest_first(
            store, created_after=created_after, created_before=created_before
        )
    )


@router.post("/leagues", response_model=SingleLeagueResponse)
async def create_league(
    league_body: LeagueBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleLeagueResponse:
    league = await store.create_league(league_body.name)
    if league is None:
        raise_conflict("league")

    return SingleLeagueResponse(data=league)


@router.get("/leagues/{league_id}", response_model=SingleLeagueResponse)
async def get_league(
    league_id: LeagueId,
    store: EntityStore = Depends(get_entity_store),
) -> SingleLeagueResponse:
    league = await store.get_league(league_id)
    if league is None:
        raise_not_found("league")

    return SingleLeagueResponse(data=league)


@router.get("/leagues/{league_id}/tournaments", response_model=TournamentsResponse)
async def get_league_tournaments(
    league_id: LeagueId,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentsResponse:
    if await store.get_league(league_id) is None:
        raise_not_found("league")

    return TournamentsResponse(data=await store.list_tournaments(league_id))


@router.get("/leagues/{league_id}/matches", response_model=MatchesResponse)
async def get_league_matches(
    league_id: LeagueId,
    store: EntityStore = Depends(get_entity_store),
) -> MatchesResponse:
    if await store.get_league(league_id) is None:
        raise_not_found("league")

    return MatchesResponse(data=await store.list_matches(league_id=league_id))
