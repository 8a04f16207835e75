"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_DB_PATH = "tracksync.db"
DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when an environment setting cannot be parsed."""


@dataclass
class Settings:
    """Process-wide settings.

    Values supplied on the command line take precedence over these.

    Attributes:
        db_path: SQLite file holding projects and tasks.
        http_timeout: Timeout in seconds for YouTrack requests.
    """

    db_path: str = DEFAULT_DB_PATH
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Parsed settings, with defaults for unset variables.

        Raises:
            ConfigError: If TRACKSYNC_HTTP_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("TRACKSYNC_HTTP_TIMEOUT")
        timeout = DEFAULT_HTTP_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    f"TRACKSYNC_HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
                ) from e
            if timeout <= 0:
                raise ConfigError("TRACKSYNC_HTTP_TIMEOUT must be positive")

        return cls(
            db_path=env.get("TRACKSYNC_DB_PATH") or DEFAULT_DB_PATH,
            http_timeout=timeout,
        )
