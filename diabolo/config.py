"""Runtime settings read from environment variables, and logging setup."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Self

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        data_dir: Directory holding saved competitors and final rankings
        log_level: Logging level name (e.g. "INFO", "DEBUG")
        fetch_timeout: Timeout in seconds when fetching competitor exports by URL
    """
    data_dir: Path = Path(".diabolo")
    log_level: str = "INFO"
    fetch_timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        env = os.environ if environ is None else environ
        defaults = cls()
        try:
            timeout = float(env.get("DIABOLO_FETCH_TIMEOUT", defaults.fetch_timeout))
        except ValueError as e:
            raise ValueError(f"DIABOLO_FETCH_TIMEOUT must be a number: {e}") from e
        return cls(
            data_dir=Path(env.get("DIABOLO_DATA_DIR", str(defaults.data_dir))),
            log_level=env.get("DIABOLO_LOG_LEVEL", defaults.log_level).upper(),
            fetch_timeout=timeout,
        )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    return Settings.from_env(environ)


def configure_logging(level: str = "INFO") -> None:
    """Send diabolo log records to stderr at the given level."""
    root = logging.getLogger("diabolo")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
