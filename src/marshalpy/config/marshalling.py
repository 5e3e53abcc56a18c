"""Marshalling defaults for endpoints and the CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import env_choice
from .errors import ConfigurationError

DEFAULT_KEY_DELIMITER: Final[str] = ";"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class MarshalConfig:
    key_delimiter: str = DEFAULT_KEY_DELIMITER
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if not self.key_delimiter:
            raise ConfigurationError("Composite key delimiter must not be empty")
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unsupported log level: {self.log_level}")


def get_marshal_config() -> MarshalConfig:
    """Build the marshalling config from ``MARSHALPY_*`` environment variables."""

    # read raw: whitespace is a legitimate separator, only "" counts as unset
    delimiter = os.getenv("MARSHALPY_KEY_DELIMITER")
    return MarshalConfig(
        key_delimiter=delimiter or DEFAULT_KEY_DELIMITER,
        log_level=env_choice("MARSHALPY_LOG_LEVEL", LOG_LEVELS, default=DEFAULT_LOG_LEVEL),
    )
