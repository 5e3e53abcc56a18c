"""Application configuration helpers."""

from __future__ import annotations

from marshalpy.common.logging import configure_logging

from .env import env_choice, optional_env_var
from .errors import ConfigurationError
from .marshalling import (
    DEFAULT_KEY_DELIMITER,
    DEFAULT_LOG_LEVEL,
    LOG_LEVELS,
    MarshalConfig,
    get_marshal_config,
)

__all__ = [
    "DEFAULT_KEY_DELIMITER",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "ConfigurationError",
    "MarshalConfig",
    "configure_logging",
    "env_choice",
    "get_marshal_config",
    "optional_env_var",
]
