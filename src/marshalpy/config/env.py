"""Read ``MARSHALPY_*`` settings from the environment."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Collection


def optional_env_var(name: str) -> str | None:
    """Return an environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value


def env_choice(name: str, choices: Collection[str], *, default: str) -> str:
    """Return the upper-cased value of ``name``, which must be one of ``choices``."""

    value = optional_env_var(name)
    if value is None:
        return default
    normalized = value.strip().upper()
    if normalized not in choices:
        allowed = ", ".join(sorted(choices))
        raise ConfigurationError(f"Unsupported {name}: {normalized} (expected one of {allowed})")
    return normalized
