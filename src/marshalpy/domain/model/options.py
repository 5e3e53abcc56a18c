"""Marshalling options and the validation mode variant."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

DEFAULT_VALIDATOR: Final[str] = "default"


@dataclass(frozen=True, slots=True)
class NoValidation:
    """Skip validation entirely."""


@dataclass(frozen=True, slots=True)
class DefaultValidation:
    """Use the endpoint's default validator."""


@dataclass(frozen=True, slots=True)
class NamedValidation:
    """Use a validator registered on the endpoint under ``name``."""

    name: str


@dataclass(frozen=True, slots=True)
class ExplicitValidation:
    """Use the given validator object as-is."""

    validator: object | None


type ValidationMode = NoValidation | DefaultValidation | NamedValidation | ExplicitValidation

_MODES: Final = (NoValidation, DefaultValidation, NamedValidation, ExplicitValidation)


@dataclass(slots=True, kw_only=True)
class MarshalOptions:
    """Options accepted by every marshalling operation.

    ``validate`` takes a ``ValidationMode`` or one of the shorthand forms: ``True``
    (default validator), ``False`` (no validation), a validator name, or any other
    object (explicit validator, see ``validator``). ``None`` means "not given" and
    is treated as ``True`` once the options are prepared.

    ``extra`` carries free-form keys for hooks; the marshaller never reads it.
    """

    validate: ValidationMode | bool | str | object | None = None
    validator: object | None = None
    field_list: Sequence[str] | None = None
    accessible_fields: Mapping[str, bool] | None = None
    extra: dict[str, Any] = field(default_factory=dict["str", "Any"])

    def copy(self) -> MarshalOptions:
        return replace(self, extra=dict(self.extra))

    def validation_mode(self) -> ValidationMode:
        """Normalize ``validate`` into the tagged variant."""

        validate = self.validate
        if isinstance(validate, _MODES):
            return validate
        if validate is None or validate is True:
            return DefaultValidation()
        if validate is False:
            return NoValidation()
        if isinstance(validate, str):
            return NamedValidation(validate)
        return ExplicitValidation(self.validator if self.validator is not None else validate)
