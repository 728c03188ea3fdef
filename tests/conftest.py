"""
Pytest configuration and fixtures for E-TernakID tests.
"""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment before importing eternak modules
os.environ["ETERNAK_ENV"] = "development"
os.environ["OPENAI_API_KEY"] = "test-key-not-real"
os.environ["STORE_BACKEND"] = "memory"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["SEED_ANIMAL_COUNT"] = "5"
os.environ["SYNC_POLL_SECONDS"] = "0"
os.environ["EDIT_PASSWORD"] = "kit321"


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.limit.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def memory_sync():
    """A fresh in-memory LivestockSync installed as the process-wide sync."""
    from eternak.db.livestock import reset_sync
    from eternak.db.store import MemoryDocumentStore
    from eternak.db.sync import LivestockSync

    sync = LivestockSync(MemoryDocumentStore())
    reset_sync(sync)
    yield sync
    reset_sync()


@pytest.fixture
def seeded_sync(memory_sync):
    """Memory sync holding the first three default animals."""
    from eternak.db.seed import default_herd

    for animal in default_herd(3):
        memory_sync.store.set_document(animal.id, animal.to_document())
    memory_sync.load()
    return memory_sync


@pytest.fixture
def sample_health_log():
    """A health log entry in stored (camelCase) shape."""
    return {
        "id": "hl-1",
        "date": "2024-03-01",
        "type": "Vaksinasi",
        "detail": "",
        "vaccineOrMedicineName": "Vaksin PMK",
        "diagnosis": None,
        "notes": "Dosis pertama",
    }


@pytest.fixture
def client(seeded_sync):
    """FastAPI TestClient backed by the seeded memory store."""
    from fastapi.testclient import TestClient

    from eternak.web.app import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def edit_headers():
    return {"X-Access-Password": "kit321"}
