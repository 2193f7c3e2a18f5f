from fastapi import APIRouter, Depends

from bladeleague.config import config
from bladeleague.logic.matches import register_duel, register_duel_by_name, resolve_match
from bladeleague.models.db.match import DuelByNameCreateBody, DuelCreateBody, MatchScoreBody
from bladeleague.routes.models import MatchesResponse, SingleMatchResponse
from bladeleague.routes.util import get_entity_store, raise_not_found
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import LeagueId, MatchId, TournamentId

router = APIRouter(prefix=config.api_prefix)


@router.get("/matches", response_model=MatchesResponse)
async def get_matches(
    tournament_id: TournamentId | None = None,
    league_id: LeagueId | None = None,
    store: EntityStore = Depends(get_entity_store),
) -> MatchesResponse:
    return MatchesResponse(
        data=await store.list_matches(tournament_id=tournament_id, league_id=league_id)
    )


@router.post("/matches/{match_id}/resolve", response_model=SingleMatchResponse)
async def submit_match_result(
    match_id: MatchId,
    match_body: MatchScoreBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleMatchResponse:
    match = await resolve_match(
        store, match_id, match_body.participant1_score, match_body.participant2_score
    )
    if match is None:
        raise_not_found("match")

    return SingleMatchResponse(data=match)


@router.post("/duels", response_model=SingleMatchResponse)
async def create_duel(
    duel_body: DuelCreateBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleMatchResponse:
    match = await register_duel(store, duel_body)
    if match is None:
        raise_not_found("participant or league")

    return SingleMatchResponse(data=match)


@router.post("/duels/by_name", response_model=SingleMatchResponse)
async def create_duel_by_name(
    duel_body: DuelByNameCreateBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleMatchResponse:
    match = await register_duel_by_name(store, duel_body)
    if match is None:
        raise_not_found("league")

    return SingleMatchResponse(data=match)
