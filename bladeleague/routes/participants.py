from fastapi import APIRouter, Depends

from bladeleague.config import config
from bladeleague.logic.ranking.records import recalculate_all_participant_records
from bladeleague.logic.rosters import list_participants_by_winrate
from bladeleague.models.db.participant import ParticipantBody
from bladeleague.routes.models import (
    ParticipantsResponse,
    RecordsRecalculation,
    RecordsRecalculationResponse,
    SingleParticipantResponse,
)
from bladeleague.routes.util import get_entity_store, raise_conflict, raise_not_found
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import ParticipantId

router = APIRouter(prefix=config.api_prefix)


@router.get("/participants", response_model=ParticipantsResponse)
async def get_participants(
    search: str | None = None,
    store: EntityStore = Depends(get_entity_store),
) -> ParticipantsResponse:
    return ParticipantsResponse(data=await list_participants_by_winrate(store, search))


@router.post("/participants", response_model=SingleParticipantResponse)
async def create_participant(
    participant_body: ParticipantBody,
    store: EntityStore = Depends(get_entity_store),
) -> SingleParticipantResponse:
    participant = await store.create_participant(participant_body.name)
    if participant is None:
        raise_conflict("participant")

    return SingleParticipantResponse(data=participant)


@router.get("/participants/{participant_id}", response_model=SingleParticipantResponse)
async def get_participant(
    participant_id: ParticipantId,
    store: EntityStore = Depends(get_entity_store),
) -> SingleParticipantResponse:
    participant = await store.get_participant(participant_id)
    if participant is None:
        raise_not_found("participant")

    return SingleParticipantResponse(data=participant)


@router.post("/participants/recalculate_records", response_model=RecordsRecalculationResponse)
async def recalculate_records(
    store: EntityStore = Depends(get_entity_store),
) -> RecordsRecalculationResponse:
    duration_ms = await recalculate_all_participant_records(store)
    participants = await store.list_participants()
    return RecordsRecalculationResponse(
        data=RecordsRecalculation(participants=len(participants), duration_ms=duration_ms)
    )
