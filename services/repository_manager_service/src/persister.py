import os
import stat
import json
import tempfile
from pathlib import Path
from typing import Any, Dict, Protocol, Union

import yaml

from .exceptions import MissingConfigError
from .schemas import Configuration
from shared.common_utils.logger import logger


class Persister(Protocol):
    """Loads and saves the configuration document."""

    def load(self) -> Configuration:
        """Raises MissingConfigError when there is no document to load."""
        ...

    def flush(self, configuration: Configuration) -> None:
        ...


class FilePersister:
    """
    Persists the configuration to a single file, as JSON when the path ends
    in '.json' and as YAML otherwise.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def is_json(self) -> bool:
        return self.path.suffix.lower() == ".json"

    def load(self) -> Configuration:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise MissingConfigError(f"Configuration file not found at {self.path}")

        if not content.strip():
            raise MissingConfigError(f"Configuration file {self.path} is empty")

        try:
            data = json.loads(content) if self.is_json else yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Could not parse configuration file {self.path}: {e}")
            raise

        if not data:
            raise MissingConfigError(f"Configuration file {self.path} is empty")
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {self.path} does not contain a mapping")

        configuration = Configuration.from_document(data)
        logger.info(f"Configuration loaded from {self.path} ({len(configuration.repositories)} repositories)")
        return configuration

    def flush(self, configuration: Configuration) -> None:
        """Writes the whole document to a temporary file, then moves it into place."""
        content = self._encode(configuration.to_document())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.chmod(tmp_path, self._file_mode())
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to save configuration to {self.path}: {e}")
            raise
        logger.debug(f"Configuration saved to {self.path}")

    def _file_mode(self) -> int:
        """Mode of the existing document, or the umask default for a new one."""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def _encode(self, document: Dict[str, Any]) -> str:
        if self.is_json:
            return json.dumps(document, indent=4) + "\n"
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
