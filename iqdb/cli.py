"""Search iqdb.org for images similar to the one at IMAGE_URL."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from iqdb.client import IqdbClient
from iqdb.config.loader import get_config_path, load_config, save_config
from iqdb.config.schema import Config
from iqdb.errors import IqdbError
from iqdb.models import Service


def select_services(services: list[Service], names: Sequence[str]) -> list[Service]:
    """Keep the services whose name matches one of ``names`` (case-insensitive)."""
    if not names:
        return services
    wanted = {name.strip().lower() for name in names}
    selected = [service for service in services if service.name.lower() in wanted]
    unknown = wanted - {service.name.lower() for service in selected}
    if unknown:
        available = ", ".join(service.name for service in services)
        raise ValueError(f"unknown service(s): {', '.join(sorted(unknown))} (available: {available})")
    return selected


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="iqdb", description=__doc__)
    parser.add_argument("image_url", nargs="?", help="URL of the image to search for")
    parser.add_argument("--config", type=Path, default=None, help="path to config.json")
    parser.add_argument(
        "--service",
        action="append",
        default=[],
        help="only search this service (repeatable, matched by name)",
    )
    parser.add_argument("--json", action="store_true", help="print one JSON object per match")
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="write the default config to --config (or ~/.iqdb/config.json) and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    if args.init_config:
        path = args.config or get_config_path()
        save_config(Config(), path)
        logger.info("Wrote default config to {}", path)
        return 0
    if not args.image_url:
        parser.error("image_url is required")

    config = load_config(args.config)
    client = IqdbClient(config)

    try:
        services = client.discover_services()
        services = select_services(services, args.service or config.services)
        logger.info("Searching {} service(s)", len(services))
        matches = client.search(args.image_url, services)
    except (IqdbError, ValueError) as e:
        logger.error("iqdb search failed: {}", e)
        return 1

    logger.info("Found {} match(es)", len(matches))
    for match in matches:
        if args.json:
            print(json.dumps(match.to_dict()))
        else:
            print(repr(match))
    return 0
