"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and FANOUT_* environment variables.  The four path
fields are the ambient path bindings handed to the dispatcher when an
invocation does not name its own file targets.
"""

from __future__ import annotations

import getpass
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict

from fanout.models.request import PathBindings


class ChainMode(str, Enum):
    """How the chained log writer continues an existing log file."""

    WEAK = "weak"  # reseed from the in-process token only
    STRICT = "strict"  # re-read the last token from the file


class FanoutConfig(BaseSettings):
    """Router configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FANOUT_LOG_PATH=/var/log/app/run.log
        export FANOUT_CHAIN_MODE=strict
        export FANOUT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FANOUT_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    log_level: str = "WARNING"
    debug: bool = False

    # Ambient path bindings
    append_path: str | None = None
    log_path: str | None = None
    replace_path: str | None = None
    xml_path: str | None = None

    # Chained log
    chain_mode: ChainMode = ChainMode.WEAK
    user: str | None = None

    # Host rendering and file encoding
    default_color: str = "default"
    encoding: str = "utf-8"

    def ambient_paths(self) -> PathBindings:
        """Return the configured fallback paths as ``PathBindings``."""
        return PathBindings(
            append_path=self.append_path,
            log_path=self.log_path,
            replace_path=self.replace_path,
            xml_path=self.xml_path,
        )

    def acting_user(self) -> str:
        """The identity folded into new log chains."""
        if self.user:
            return self.user
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return "unknown"


# Module-level singleton — import as `from fanout.config import config`
config = FanoutConfig()
