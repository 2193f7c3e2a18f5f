from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from databases import Database
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine

from bladeleague.app import app
from bladeleague.routes.util import get_entity_store
from bladeleague.schema import metadata
from bladeleague.store.database import DatabaseEntityStore
from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_APP_CONFIG


@pytest.fixture
async def api_client(store: InMemoryEntityStore) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_entity_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def database_store(tmp_path: Path) -> AsyncIterator[DatabaseEntityStore]:
    database_url = f"sqlite:///{tmp_path / 'bladeleague.db'}"
    engine = create_engine(database_url)
    metadata.create_all(engine)
    engine.dispose()

    database = Database(database_url)
    await database.connect()
    yield DatabaseEntityStore(database, DUMMY_APP_CONFIG.scoring_system)
    await database.disconnect()
