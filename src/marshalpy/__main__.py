from __future__ import annotations

from marshalpy.ui.cli import run

run()
