import pytest
from unittest.mock import MagicMock

from services.repository_manager_service import (
    RepositoryManager,
    RepositoryEntry,
    MissingConfigError,
)


@pytest.fixture
def mock_lock():
    """Lock double that always grants the lock."""
    lock = MagicMock()
    lock.acquire = MagicMock(return_value=True)
    lock.release = MagicMock()
    return lock


@pytest.fixture
def mock_persister():
    """Persister double with no stored document."""
    persister = MagicMock()
    persister.load = MagicMock(side_effect=MissingConfigError("no document"))
    persister.flush = MagicMock()
    return persister


@pytest.fixture
def manager(mock_lock, mock_persister):
    """Create a RepositoryManager over an empty store."""
    return RepositoryManager(lock=mock_lock, persister=mock_persister)


@pytest.fixture
def vcs_repository():
    return RepositoryEntry(id="r1", type="vcs", url="https://example.com/a")


@pytest.fixture
def package_repository():
    return RepositoryEntry(
        id="p1",
        type="package",
        package={"name": "acme/widget", "version": "1.0.0"},
    )
