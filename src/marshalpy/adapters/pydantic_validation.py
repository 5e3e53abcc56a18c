"""Validators backed by pydantic models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from .pydantic_types import PydanticTypeRegistry

SCHEMA_ERROR_KEY: Final[str] = "_schema"

_MODEL_CONFIG: Final = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class PydanticModelValidator:
    """Validate raw records against a pydantic model.

    Each pydantic error is reported under the top-level field it concerns. Updates
    of existing entities (``is_new=False``) are partial, so "missing" errors are
    ignored for them.
    """

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    def validate(self, data: Mapping[str, Any], is_new: bool) -> dict[str, list[str]]:
        try:
            self._model.model_validate(dict(data))
        except ValidationError as exc:
            return _collect_errors(exc, partial=not is_new)
        return {}


def _collect_errors(exc: ValidationError, *, partial: bool) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        if partial and error["type"] == "missing":
            continue
        location = error["loc"]
        name = str(location[0]) if location else SCHEMA_ERROR_KEY
        errors.setdefault(name, []).append(error["msg"])
    return errors


def model_validator_for(
    name: str,
    columns: Mapping[str, str],
    *,
    types: PydanticTypeRegistry,
    required: Collection[str] = (),
) -> PydanticModelValidator:
    """Build a validator from column type names.

    Typed columns must parse as their type. ``required`` fields must be present;
    typed required fields must also not be ``None``, untyped ones accept any value.
    Fields are declared through aliases so column names need not be
    valid Python identifiers.
    """

    definitions: dict[str, Any] = {}
    names = list(columns)
    names.extend(column for column in required if column not in columns)
    for position, column in enumerate(names):
        type_name = columns.get(column)
        python_type = types.python_type_for(type_name) if type_name else None
        if python_type is None:
            python_type = Any
        if column in required:
            definitions[f"field_{position}"] = (python_type, Field(alias=column))
        elif python_type is Any:
            definitions[f"field_{position}"] = (Any, Field(default=None, alias=column))
        else:
            definitions[f"field_{position}"] = (
                python_type | None,
                Field(default=None, alias=column),
            )

    model = create_model(f"{name}Record", __config__=_MODEL_CONFIG, **definitions)
    return PydanticModelValidator(model)
