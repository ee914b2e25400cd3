"""Command-line surface: ``statbeacon [-c PATH | --config PATH]``.

Parsing is lenient: arguments the parser does not recognise are ignored, and
``-c``/``--config`` given without a value falls back to the default path.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from statbeacon.config import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statbeacon",
        description="Periodically report CPU, memory and temperature to HTTP endpoints.",
    )
    parser.add_argument(
        "-c",
        "--config",
        nargs="?",
        const=DEFAULT_CONFIG_PATH,
        default=DEFAULT_CONFIG_PATH,
        help=f"path to the TOML configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    args, unknown = build_parser().parse_known_args(argv)
    if unknown:
        logger.debug("Ignoring unrecognised arguments: %s", " ".join(unknown))
    return args


def config_path(argv: Sequence[str] | None = None) -> Path:
    return Path(parse_args(argv).config)
