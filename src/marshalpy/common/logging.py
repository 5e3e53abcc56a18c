"""Logging setup for marshalpy entry points."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for command-line use.

    ``level`` is a level number or a name such as ``"DEBUG"`` (as read from
    ``MARSHALPY_LOG_LEVEL``). A root logger that already has handlers is left alone
    unless ``force`` is set. Library modules only call ``getLogger(__name__)``.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
