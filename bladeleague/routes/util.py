from typing import NoReturn

from fastapi import HTTPException, Request
from starlette import status

from bladeleague.models.db.tournament import Tournament
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import TournamentId


def get_entity_store(request: Request) -> EntityStore:
    store: EntityStore = request.app.state.entity_store
    return store


def raise_not_found(entity: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Could not find {entity} with the given id",
    )


def raise_conflict(entity: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"A {entity} with this name already exists",
    )


async def get_tournament_or_404(store: EntityStore, tournament_id: TournamentId) -> Tournament:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        raise_not_found("tournament")
    return tournament
