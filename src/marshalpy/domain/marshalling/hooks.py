"""Ready-made ``MarshalHooks`` implementations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from marshalpy.domain.model import MarshalOptions
from marshalpy.domain.ports.hooks import AFTER_MARSHAL, BEFORE_MARSHAL

if TYPE_CHECKING:
    from marshalpy.domain.ports import MarshalHooks, MarshallableEntity

log = logging.getLogger(__name__)

type EventDispatch = Callable[[str, dict[str, Any]], None]


class NoopHooks:
    """Hooks that leave everything untouched."""

    def before_marshal(
        self, data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]:
        return data, options

    def after_marshal(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions,
    ) -> None:
        return None


class HookChain:
    """Run several hooks in registration order, threading data and options through."""

    def __init__(self, *hooks: MarshalHooks) -> None:
        self._hooks: list[MarshalHooks] = list(hooks)

    def add(self, hooks: MarshalHooks) -> None:
        self._hooks.append(hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def before_marshal(
        self, data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]:
        for hooks in self._hooks:
            data, options = hooks.before_marshal(data, options)
        return data, options

    def after_marshal(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions,
    ) -> None:
        for hooks in self._hooks:
            hooks.after_marshal(entity, data, options)


class EventChannelHooks:
    """Adapt a named-event dispatcher to ``MarshalHooks``.

    ``dispatch(name, payload)`` receives a plain dict. For ``Model.beforeMarshal``
    the payload holds ``data`` and ``options``; listeners may mutate both in place
    or replace the entries, and the payload is read back afterwards. For
    ``Model.afterMarshal`` it additionally holds ``entity``, with copies of data
    and options so listeners cannot alter the finished call.
    """

    def __init__(self, dispatch: EventDispatch) -> None:
        self._dispatch = dispatch

    def before_marshal(
        self, data: dict[str, Any], options: MarshalOptions
    ) -> tuple[dict[str, Any], MarshalOptions]:
        payload: dict[str, Any] = {"data": data, "options": options}
        self._dispatch(BEFORE_MARSHAL, payload)
        new_data = payload.get("data")
        new_options = payload.get("options")
        if not isinstance(new_data, Mapping):
            raise TypeError(f"{BEFORE_MARSHAL} listeners must leave a mapping under 'data'")
        if not isinstance(new_options, MarshalOptions):
            raise TypeError(f"{BEFORE_MARSHAL} listeners must leave MarshalOptions under 'options'")
        return dict(new_data), new_options

    def after_marshal(
        self,
        entity: MarshallableEntity,
        data: Mapping[str, Any],
        options: MarshalOptions,
    ) -> None:
        log.debug("Dispatching %s for %s", AFTER_MARSHAL, type(entity).__name__)
        self._dispatch(
            AFTER_MARSHAL,
            {"entity": entity, "data": dict(data), "options": options.copy()},
        )

