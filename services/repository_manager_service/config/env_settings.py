from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class ManagerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service settings
    SERVICE_NAME: str = "repository_manager_service"
    SERVICE_VERSION: str = "0.1.0"

    # Storage settings
    REPOSITORY_CONFIG_PATH: str = "config/repositories.yaml"

    # Lock settings
    LOCK_TIMEOUT: float = 10.0  # seconds, -1 waits forever, 0 tries once

    # Logging settings
    LOG_LEVEL: str = "INFO"

    @field_validator("LOCK_TIMEOUT")
    @classmethod
    def check_lock_timeout(cls, value: float) -> float:
        if value < 0 and value != -1:
            raise ValueError("LOCK_TIMEOUT must be -1 or a non-negative number of seconds")
        return value
