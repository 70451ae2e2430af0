import re
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, Optional, Union

from .exceptions import LockAcquisitionError, MissingConfigError, UnknownRepositoryError
from .locking import Lock, ThreadLock
from .persister import FilePersister, Persister
from .schemas import Configuration, RepositoryEntry
from services.repository_manager_service.config.env_settings import ManagerSettings
from shared.common_utils.logger import logger


class RepositoryManager:
    """
    Mediates every read and write of the repository configuration document.

    The configuration is loaded from the persister on first access and cached
    for the lifetime of the manager. Mutations run under the lock and end with
    a flush of the whole document; reads are not locked.
    """

    def __init__(self, lock: Lock, persister: Persister):
        self._lock = lock
        self._persister = persister
        self._configuration: Optional[Configuration] = None

    @classmethod
    def from_settings(cls, settings: Optional[ManagerSettings] = None) -> "RepositoryManager":
        """Creates a manager backed by the configured file and an in-process lock."""
        settings = settings or ManagerSettings()

        logger.setLevel(settings.LOG_LEVEL)
        return cls(
            lock=ThreadLock(timeout=settings.LOCK_TIMEOUT),
            persister=FilePersister(settings.REPOSITORY_CONFIG_PATH),
        )

    def get_config(self) -> Configuration:
        if self._configuration is not None:
            return self._configuration

        try:
            self._configuration = self._persister.load()
        except MissingConfigError as e:
            logger.warning(f"{e}. Using empty configuration.")
            self._configuration = Configuration()

        return self._configuration

    def get_repositories(self) -> Dict[str, RepositoryEntry]:
        """
        Returns the live mapping of repositories by id. Iterate it freely, but
        mutate only through add, add_all, update and delete.
        """
        return self.get_config().repositories

    def find_one_repository(self, repository_id: str) -> Optional[RepositoryEntry]:
        return self.get_repositories().get(repository_id)

    def find_by_url(self, pattern: Union[str, re.Pattern]) -> Optional[RepositoryEntry]:
        """Returns the first repository, in mapping order, whose url matches the pattern."""
        regex = re.compile(pattern)
        for repository in self.get_repositories().values():
            if repository.url is not None and regex.search(repository.url):
                return repository
        return None

    def add(self, repository: RepositoryEntry) -> None:
        with self.locked():
            self._do_add(repository)
            self.flush()
        logger.info(f"Repository {repository.id} added")

    def add_all(self, repositories: Iterable[RepositoryEntry]) -> None:
        batch = list(repositories)
        with self.locked():
            for repository in batch:
                self._do_add(repository)
            self.flush()
        logger.info(f"{len(batch)} repositories added")

    def update(self, repository: RepositoryEntry, updated: RepositoryEntry) -> None:
        """
        Replaces an existing repository. The updated entry is stored under its
        own id and moves to the end of the mapping, so an update can rename.
        """
        repositories = self.get_repositories()
        if repository.id not in repositories:
            raise UnknownRepositoryError(repository.id)

        with self.locked():
            if repository.id not in repositories:
                raise UnknownRepositoryError(repository.id)
            del repositories[repository.id]
            repositories[updated.id] = self._clean_up_repository(updated)
            self.flush()

        if updated.id != repository.id:
            logger.info(f"Repository {repository.id} updated and renamed to {updated.id}")
        else:
            logger.info(f"Repository {repository.id} updated")

    def delete(self, repository: RepositoryEntry) -> None:
        with self.locked():
            removed = self.get_config().repositories.pop(repository.id, None)
            self.flush()

        if removed is None:
            logger.debug(f"Repository {repository.id} was not registered, nothing to delete")
        else:
            logger.info(f"Repository {repository.id} deleted")

    def flush(self) -> None:
        """Persists the current configuration."""
        self._persister.flush(self.get_config())

    def acquire_lock(self) -> Lock:
        if not self._lock.acquire():
            logger.error("Cannot acquire lock for repository configuration")
            raise LockAcquisitionError("Cannot acquire lock for repository configuration")
        return self._lock

    @contextmanager
    def locked(self) -> Iterator[Lock]:
        """Holds the configuration lock for the duration of the block."""
        lock = self.acquire_lock()
        try:
            yield lock
        finally:
            lock.release()

    def _do_add(self, repository: RepositoryEntry) -> None:
        self.get_config().repositories[repository.id] = self._clean_up_repository(repository)

    @staticmethod
    def _clean_up_repository(repository: RepositoryEntry) -> RepositoryEntry:
        return repository.clean_up()
