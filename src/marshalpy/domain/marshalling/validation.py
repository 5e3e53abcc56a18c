"""Resolve and run the validator selected by marshalling options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from marshalpy.config.errors import ConfigurationError
from marshalpy.domain.model import (
    DEFAULT_VALIDATOR,
    DefaultValidation,
    NamedValidation,
    NoValidation,
)

if TYPE_CHECKING:
    from marshalpy.domain.model import MarshalOptions, ValidationMode
    from marshalpy.domain.ports import EndpointContext, ValidationErrors, ValidatorHandle


class InvalidValidatorConfigurationError(ConfigurationError):
    """Raised when the selected validator cannot validate anything."""

    def __init__(self, mode: ValidationMode, validator: object) -> None:
        self.mode = mode
        self.validator = validator
        super().__init__(
            '"validate" must be a boolean, a validator name or an object with a '
            f"validate() method; {mode!r} resolved to {type(validator).__name__}"
        )


def resolve_validator(endpoint: EndpointContext, mode: ValidationMode) -> ValidatorHandle | None:
    """Return the validator for ``mode``; ``None`` when validation is disabled."""

    if isinstance(mode, NoValidation):
        return None
    validator: object | None
    if isinstance(mode, DefaultValidation):
        validator = endpoint.validator(DEFAULT_VALIDATOR)
    elif isinstance(mode, NamedValidation):
        validator = endpoint.validator(mode.name)
    else:
        validator = mode.validator

    if not callable(getattr(validator, "validate", None)):
        raise InvalidValidatorConfigurationError(mode, validator)
    return validator  # type: ignore[return-value]


def validate_data(
    endpoint: EndpointContext,
    data: Mapping[str, Any],
    options: MarshalOptions,
    *,
    is_new: bool,
) -> ValidationErrors:
    """Validate ``data`` according to ``options`` and return per-field messages."""

    validator = resolve_validator(endpoint, options.validation_mode())
    if validator is None:
        return {}
    raw = validator.validate(data, is_new)
    return {str(name): _messages(entry) for name, entry in raw.items()}


def _messages(entry: object) -> list[str]:
    # rule-keyed mappings (rule -> message) and bare strings are accepted too
    if isinstance(entry, str):
        return [entry]
    if isinstance(entry, Mapping):
        return [str(message) for message in entry.values()]
    if isinstance(entry, Iterable):
        return [str(message) for message in entry]
    return [str(entry)]
