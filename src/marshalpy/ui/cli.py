from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from marshalpy.app import (
    endpoint_from_descriptor,
    hydrate_records,
    load_endpoint_descriptor,
    load_records,
    reconcile_records,
    resource_summary,
)
from marshalpy.config import ConfigurationError, configure_logging, get_marshal_config
from marshalpy.domain.model import MarshalOptions

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from marshalpy.domain.ports import MarshallableEntity

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hydrate and reconcile endpoint records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    hydrate = subparsers.add_parser("hydrate", help="Hydrate records as new resources")
    _add_common_arguments(hydrate)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Merge records into existing rows, matched by primary key",
    )
    _add_common_arguments(reconcile)
    reconcile.add_argument(
        "--existing",
        type=Path,
        required=True,
        help="JSON array of rows already stored for the endpoint",
    )

    return parser.parse_args(list(argv))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--endpoint",
        type=Path,
        required=True,
        help="JSON endpoint descriptor (alias, primary_key, columns, required)",
    )
    parser.add_argument(
        "--data",
        type=Path,
        required=True,
        help="JSON array of incoming records",
    )
    validation = parser.add_mutually_exclusive_group()
    validation.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip validation",
    )
    validation.add_argument(
        "--validator",
        type=str,
        help="Name of the endpoint validator to use instead of the default one",
    )
    parser.add_argument(
        "--fields",
        type=str,
        help="Comma-separated list of fields that may be written",
    )


def _build_options(args: argparse.Namespace) -> MarshalOptions:
    validate: bool | str = True
    if args.no_validate:
        validate = False
    elif args.validator:
        validate = args.validator
    field_list = None
    if args.fields is not None:
        field_list = [name.strip() for name in args.fields.split(",") if name.strip()]
    return MarshalOptions(validate=validate, field_list=field_list)


def _emit(resources: Sequence[MarshallableEntity]) -> None:
    payload = [resource_summary(resource) for resource in resources]
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = get_marshal_config()
        configure_logging(level=config.log_level)
        parsed_args = _parse_args(args_list)
        options = _build_options(parsed_args)
        endpoint = endpoint_from_descriptor(
            load_endpoint_descriptor(parsed_args.endpoint), config=config
        )
        records = load_records(parsed_args.data)
        existing = load_records(parsed_args.existing) if parsed_args.command == "reconcile" else []
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "hydrate":
            resources = hydrate_records(endpoint, records, options=options)
        elif parsed_args.command == "reconcile":
            resources = reconcile_records(endpoint, existing, records, options=options)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        _emit(resources)
    except ConfigurationError:
        log.exception("Endpoint configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error while marshalling")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
