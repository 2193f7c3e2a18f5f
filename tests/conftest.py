import pytest

from bladeleague.store.memory import InMemoryEntityStore
from bladeleague.utils.dummy_records import DUMMY_APP_CONFIG


@pytest.fixture
def store() -> InMemoryEntityStore:
    return InMemoryEntityStore(DUMMY_APP_CONFIG)
