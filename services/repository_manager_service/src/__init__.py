"""
Repository Manager Service Source Package
Contains the core implementation of the repository configuration manager.
"""

from .repository_manager import RepositoryManager
from .schemas import (
    RepositoryType,
    RepositoryEntry,
    Configuration,
)
from .exceptions import (
    RepositoryManagerError,
    MissingConfigError,
    UnknownRepositoryError,
    LockAcquisitionError,
)
from .persister import Persister, FilePersister
from .locking import Lock, ThreadLock

__all__ = [
    # Main components
    "RepositoryManager",

    # Schemas
    "RepositoryType",
    "RepositoryEntry",
    "Configuration",

    # Errors
    "RepositoryManagerError",
    "MissingConfigError",
    "UnknownRepositoryError",
    "LockAcquisitionError",

    # Collaborators
    "Persister",
    "FilePersister",
    "Lock",
    "ThreadLock",
]
