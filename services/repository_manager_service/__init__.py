"""
Repository Manager Service
Mediates locked, persisted access to the shared repository configuration.
"""

from .src.repository_manager import RepositoryManager
from .src.schemas import (
    RepositoryType,
    RepositoryEntry,
    Configuration,
)
from .src.exceptions import (
    RepositoryManagerError,
    MissingConfigError,
    UnknownRepositoryError,
    LockAcquisitionError,
)
from .src.persister import Persister, FilePersister
from .src.locking import Lock, ThreadLock

__version__ = "0.1.0"
__all__ = [
    "RepositoryManager",
    "RepositoryType",
    "RepositoryEntry",
    "Configuration",
    "RepositoryManagerError",
    "MissingConfigError",
    "UnknownRepositoryError",
    "LockAcquisitionError",
    "Persister",
    "FilePersister",
    "Lock",
    "ThreadLock",
]
