import argparse
import asyncio
import os
import sys

import structlog
import uvloop
import yaml
from rich.console import Console
from rich.text import Text

from .client import CloudflareClient
from .logging_conf import configure_logging
from .report import build_rows, render_results
from .results import exit_code, reorder
from .selection import apply_overrides, select_zones
from .settings import load_config

logger = structlog.getLogger(__name__)

NO_ZONE_MESSAGE = "Please supply a valid zone identifier in the input argument or the cloudflare config."


def _environ_or_required(key):
    return {"default": os.environ.get(key)} if os.environ.get(key) else {"required": True}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cfpurge", description="Purge files/tags/hosts from CloudFlare's cache.")
    parser.add_argument("-c", "--config", **_environ_or_required("CONFIG_FILE"))  # type: ignore
    parser.add_argument("zone", nargs="?", help="A zone identifier.")
    parser.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        help="One or more files that should be removed from the cache.",
    )
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="One or more tags that should be removed from the cache.",
    )
    parser.add_argument(
        "--host",
        dest="hosts",
        action="append",
        default=[],
        help="One or more hosts that should be removed from the cache.",
    )
    return parser


async def main(args: argparse.Namespace, console: Console | None = None) -> int:
    console = console or Console()
    err_console = Console(stderr=True)

    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        err_console.print(Text(f"Invalid configuration: {e}", style="red"), soft_wrap=True)
        return 1

    settings = config.settings
    configure_logging(settings.log.level, console_colors=settings.log.colors)

    zones = select_zones(config.zone_descriptors(), args.zone)
    if not zones:
        err_console.print(Text(NO_ZONE_MESSAGE, style="red"), soft_wrap=True)
        return 1

    apply_overrides(zones, files=args.files, tags=args.tags, hosts=args.hosts)
    logger.info("Purging zones", zones=list(zones))

    async with CloudflareClient.from_settings(settings.cloudflare) as client:
        results = reorder(await client.purge(zones), zones.keys())

    render_results(build_rows(zones, results), console)
    return exit_code(results)


def run(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)
    with asyncio.Runner(loop_factory=uvloop.new_event_loop) as runner:
        code = runner.run(main(args))
    sys.exit(code)
