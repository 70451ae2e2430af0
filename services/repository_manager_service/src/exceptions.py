class RepositoryManagerError(Exception):
    pass

class MissingConfigError(RepositoryManagerError):
    """The persisted configuration document does not exist or is empty."""

class UnknownRepositoryError(RepositoryManagerError):
    def __init__(self, repository_id: str):
        super().__init__(f"Unknown repository: {repository_id}")
        self.repository_id = repository_id

class LockAcquisitionError(RepositoryManagerError, OSError):
    """The configuration lock could not be acquired."""
