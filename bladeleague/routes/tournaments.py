from fastapi import APIRouter, Depends

from bladeleague.config import config
from bladeleague.logic.planning.rounds import get_tournament_rounds
from bladeleague.logic.ranking.standings import get_tournament_standings
from bladeleague.logic.rosters import (
    add_participant_to_tournament,
    create_participant_in_tournament,
    create_tournament,
    set_tournament_status,
)
from bladeleague.logic.scheduling.playoffs import generate_playoffs
from bladeleague.logic.scheduling.round_robin import regenerate_group_schedule
from bladeleague.logic.scheduling.structure import (
    change_tournament_phases,
    toggle_group_stage,
    toggle_playoffs,
)
from bladeleague.models.db.match import PlayoffsCreateBody
from bladeleague.models.db.participant import ParticipantBody
from bladeleague.models.db.tournament import (
    TournamentBody,
    TournamentParticipantBody,
    TournamentPhasesBody,
    TournamentStatusBody,
)
from bladeleague.routes.models import (
    MatchesResponse,
    MatchRoundsResponse,
    ScheduleUpdate,
    ScheduleUpdateResponse,
    StandingsResponse,
    StructureUpdate,
    StructureUpdateResponse,
    TournamentResponse,
    TournamentsResponse,
)
from bladeleague.routes.util import (
    get_entity_store,
    get_tournament_or_404,
    raise_conflict,
    raise_not_found,
)
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import LeagueId, TournamentId

router = APIRouter(prefix=config.api_prefix)


@router.get("/tournaments", response_model=TournamentsResponse)
async def get_tournaments(
    league_id: LeagueId | None = None,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentsResponse:
    return TournamentsResponse(data=await store.list_tournaments(league_id))


@router.post("/tournaments", response_model=TournamentResponse)
async def create_new_tournament(
    tournament_body: TournamentBody,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentResponse:
    tournament = await create_tournament(store, tournament_body)
    if tournament is None:
        raise_conflict("tournament")

    return TournamentResponse(data=tournament)


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentResponse:
    return TournamentResponse(data=await get_tournament_or_404(store, tournament_id))


@router.post("/tournaments/{tournament_id}/participants", response_model=TournamentResponse)
async def add_tournament_participant(
    tournament_id: TournamentId,
    participant_body: TournamentParticipantBody,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentResponse:
    tournament = await add_participant_to_tournament(
        store, tournament_id, participant_body.participant_id
    )
    if tournament is None:
        raise_not_found("tournament or participant")

    return TournamentResponse(data=tournament)


@router.post(
    "/tournaments/{tournament_id}/participants/create", response_model=TournamentResponse
)
async def create_tournament_participant(
    tournament_id: TournamentId,
    participant_body: ParticipantBody,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentResponse:
    tournament = await create_participant_in_tournament(
        store, tournament_id, participant_body.name
    )
    if tournament is None:
        raise_not_found("tournament")

    return TournamentResponse(data=tournament)


@router.put("/tournaments/{tournament_id}/status", response_model=TournamentResponse)
async def update_tournament_status(
    tournament_id: TournamentId,
    status_body: TournamentStatusBody,
    store: EntityStore = Depends(get_entity_store),
) -> TournamentResponse:
    tournament = await set_tournament_status(store, tournament_id, status_body.status)
    if tournament is None:
        raise_not_found("tournament")

    return TournamentResponse(data=tournament)


@router.put("/tournaments/{tournament_id}/structure", response_model=StructureUpdateResponse)
async def update_tournament_structure(
    tournament_id: TournamentId,
    phases_body: TournamentPhasesBody,
    store: EntityStore = Depends(get_entity_store),
) -> StructureUpdateResponse:
    change = await change_tournament_phases(
        store,
        tournament_id,
        has_groups=phases_body.has_groups,
        has_playoffs=phases_body.has_playoffs,
    )
    if change is None:
        raise_not_found("tournament")

    return StructureUpdateResponse(data=StructureUpdate.from_change(change))


@router.post("/tournaments/{tournament_id}/toggle_groups", response_model=StructureUpdateResponse)
async def toggle_tournament_groups(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> StructureUpdateResponse:
    change = await toggle_group_stage(store, tournament_id)
    if change is None:
        raise_not_found("tournament")

    return StructureUpdateResponse(data=StructureUpdate.from_change(change))


@router.post(
    "/tournaments/{tournament_id}/toggle_playoffs", response_model=StructureUpdateResponse
)
async def toggle_tournament_playoffs(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> StructureUpdateResponse:
    change = await toggle_playoffs(store, tournament_id)
    if change is None:
        raise_not_found("tournament")

    return StructureUpdateResponse(data=StructureUpdate.from_change(change))


@router.post("/tournaments/{tournament_id}/schedule", response_model=ScheduleUpdateResponse)
async def generate_group_schedule(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> ScheduleUpdateResponse:
    update = await regenerate_group_schedule(store, tournament_id)
    if update is None:
        raise_not_found("tournament")

    return ScheduleUpdateResponse(
        data=ScheduleUpdate(
            matches_deleted=len(update.matches_to_delete),
            matches_created=len(update.matches_to_create),
        )
    )


@router.post("/tournaments/{tournament_id}/playoffs", response_model=MatchesResponse)
async def create_playoffs(
    tournament_id: TournamentId,
    playoffs_body: PlayoffsCreateBody,
    store: EntityStore = Depends(get_entity_store),
) -> MatchesResponse:
    matches = await generate_playoffs(
        store, tournament_id, playoffs_body.playoff_round, playoffs_body.seed
    )
    if matches is None:
        raise_not_found("tournament")

    return MatchesResponse(data=matches)


@router.get("/tournaments/{tournament_id}/matches", response_model=MatchesResponse)
async def get_tournament_matches(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> MatchesResponse:
    await get_tournament_or_404(store, tournament_id)
    return MatchesResponse(data=await store.list_matches(tournament_id=tournament_id))


@router.get("/tournaments/{tournament_id}/rounds", response_model=MatchRoundsResponse)
async def get_rounds(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> MatchRoundsResponse:
    rounds = await get_tournament_rounds(store, tournament_id)
    if rounds is None:
        raise_not_found("tournament")

    return MatchRoundsResponse(data=rounds)


@router.get("/tournaments/{tournament_id}/standings", response_model=StandingsResponse)
async def get_standings_of_tournament(
    tournament_id: TournamentId,
    store: EntityStore = Depends(get_entity_store),
) -> StandingsResponse:
    standings = await get_tournament_standings(store, tournament_id)
    if standings is None:
        raise_not_found("tournament")

    return StandingsResponse(data=standings)
