import os

# Settings are read at import time; tests never touch a real database file
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tablegen.api.deps import get_list_store  # noqa: E402
from tablegen.infrastructure.stores import InMemoryListStore  # noqa: E402
from tablegen.main import app  # noqa: E402


@pytest.fixture
def memory_store():
    return InMemoryListStore()


@pytest.fixture
def client(memory_store):
    app.dependency_overrides[get_list_store] = lambda: memory_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
