"""
Command line inspection of the effective GUI endpoint.

Usage:
    gui-endpoint show --config gui.json
    gui-endpoint url
    gui-endpoint check-key "$KEY" --config gui.json

    # Or directly:
    python -m gui_endpoint.cli show --format toml
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import toml
from pydantic import ValidationError

from .__version__ import __version__
from .exceptions import ConfigError
from .internal.config import get_config_value
from .models import EndpointConfig
from .resolver import EndpointResolver
from .transport import resolve

logger = logging.getLogger(__name__)


def load_record(path: Optional[str]) -> EndpointConfig:
    """Read an endpoint record from a JSON file, or return the default record."""
    if path is None:
        return EndpointConfig()

    record_path = Path(path)
    try:
        with open(record_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read endpoint record from {record_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Endpoint record in {record_path} must be a JSON object")

    try:
        return EndpointConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid endpoint record in {record_path}: {e}") from e


def cmd_show(args: argparse.Namespace) -> int:
    endpoint = resolve(load_record(args.config))
    if args.format == "toml":
        print(toml.dumps({"endpoint": endpoint.to_dict()}), end="")
    else:
        print(json.dumps(endpoint.to_dict(), indent=2))
    return 0


def cmd_url(args: argparse.Namespace) -> int:
    print(EndpointResolver(load_record(args.config)).url())
    return 0


def cmd_check_key(args: argparse.Namespace) -> int:
    if EndpointResolver(load_record(args.config)).is_valid_api_key(args.key):
        print("valid")
        return 0
    print("invalid")
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gui-endpoint", description="Inspect the effective GUI endpoint")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print the resolved endpoint")
    show.add_argument("--config", "-c", help="JSON file holding the endpoint record")
    show.add_argument("--format", "-f", choices=["json", "toml"], default="json", help="Output format")
    show.set_defaults(func=cmd_show)

    url = subparsers.add_parser("url", help="Print the URL front-ends should display")
    url.add_argument("--config", "-c", help="JSON file holding the endpoint record")
    url.set_defaults(func=cmd_url)

    check_key = subparsers.add_parser("check-key", help="Exit 0 if KEY is a valid API key")
    check_key.add_argument("key", help="API key to check")
    check_key.add_argument("--config", "-c", help="JSON file holding the endpoint record")
    check_key.set_defaults(func=cmd_check_key)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "debug" if args.debug else get_config_value("log_level")
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except ConfigError as e:
        logger.debug("Endpoint record could not be loaded", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
