from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from bladeleague.config import StoreBackend, config
from bladeleague.database import database
from bladeleague.models.db.app_config import ScoringSystem
from bladeleague.routes import (
    app_config,
    blades,
    leagues,
    matches,
    participants,
    standings,
    tournaments,
)
from bladeleague.store.base import EntityStore
from bladeleague.store.database import DatabaseEntityStore
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.alembic import alembic_run_migrations
from bladeleague.utils.logging import logger


def create_entity_store() -> EntityStore:
    match config.store_backend:
        case StoreBackend.DATABASE:
            return DatabaseEntityStore(
                database,
                ScoringSystem(win=config.default_scoring_win, loss=config.default_scoring_loss),
            )
        case StoreBackend.MEMORY:
            return InMemoryEntityStore()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if config.store_backend is StoreBackend.DATABASE:
        if config.auto_run_migrations:
            alembic_run_migrations()
        await database.connect()
        logger.info(f"Connected to database, environment: {config.environment.value}")

    yield

    if config.store_backend is StoreBackend.DATABASE:
        await database.disconnect()


routers = {
    "Participants": participants.router,
    "Leagues": leagues.router,
    "Tournaments": tournaments.router,
    "Matches": matches.router,
    "Standings": standings.router,
    "Configuration": app_config.router,
    "Blades": blades.router,
}

app = FastAPI(
    title="Blade League API",
    docs_url="/docs" if not config.is_production() else None,
    redoc_url=None,
    lifespan=lifespan,
)
app.state.entity_store = create_entity_store()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in config.cors_origins.split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


for tag, router in routers.items():
    app.include_router(router, tags=[tag])
