"""
Command-line interface for URL shortener administration.

Usage:
    shortener shorten <url> [--slug SLUG]
    shortener get <slug>
    shortener stats <slug>
    shortener health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from .errors import NotFoundError, ShortenerError, StoreUnavailableError
from .records import RecordStore
from .slugs import SlugGenerator
from .store import create_store
from .common.logging_config import setup_logging


class ShortenerCLI:
    """Command-line interface over a RecordStore.

    Each command prints one JSON document (stdout on success, stderr on
    failure) and returns a process exit code.
    """

    def __init__(self, records: RecordStore):
        self.records = records

    def _ok(self, **fields) -> int:
        print(json.dumps({"success": True, **fields}, indent=2))
        return 0

    def _fail(self, error: str) -> int:
        print(json.dumps({"success": False, "error": error}, indent=2), file=sys.stderr)
        return 1

    async def shorten(self, url: str, slug: Optional[str] = None) -> int:
        """Create a short link."""
        try:
            record = await self.records.create_record(slug, url)
        except StoreUnavailableError as e:
            return self._fail(f"Store unavailable: {e}")
        except ShortenerError as e:
            return self._fail(str(e))

        return self._ok(
            slug=record.slug,
            url=record.url,
            secret=record.secret,
            message=f"Successfully shortened URL to: {record.slug}",
        )

    async def get(self, slug: str) -> int:
        """Print the target URL without counting a visit."""
        try:
            url = await self.records.resolve_for_display(slug)
        except NotFoundError:
            return self._fail(f"Slug '{slug}' not found")
        except ShortenerError as e:
            return self._fail(str(e))

        return self._ok(slug=slug.lower(), url=url)

    async def stats(self, slug: str) -> int:
        """Print a record's click count."""
        try:
            record = await self.records.get_record(slug)
        except NotFoundError:
            return self._fail(f"Slug '{slug}' not found")
        except ShortenerError as e:
            return self._fail(str(e))

        return self._ok(slug=record.slug, url=record.url, clicks=record.clicks)

    async def health(self) -> int:
        """Check that the store answers."""
        healthy = await self.records.health_check()
        if not healthy:
            return self._fail("KV store is unhealthy")
        return self._ok(store="healthy")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shortener",
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with a custom slug
  %(prog)s shorten https://example.com/long/url --slug mylink

  # Get the target URL
  %(prog)s get mylink

  # Get click count
  %(prog)s stats mylink
        """,
    )

    parser.add_argument(
        "--kv-url",
        default=os.getenv("KV_REST_API_URL"),
        help="KV store endpoint (default: from KV_REST_API_URL env)",
    )
    parser.add_argument(
        "--kv-token",
        default=os.getenv("KV_REST_API_TOKEN"),
        help="KV store access token (default: from KV_REST_API_TOKEN env)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--slug", help="Custom slug")

    get_parser = subparsers.add_parser("get", help="Get the target URL")
    get_parser.add_argument("slug", help="Slug to look up")

    stats_parser = subparsers.add_parser("stats", help="Get click count")
    stats_parser.add_argument("slug", help="Slug to get stats for")

    subparsers.add_parser("health", help="Check store health")

    return parser


async def run(args: argparse.Namespace, records: RecordStore) -> int:
    """Dispatch one parsed command."""
    cli = ShortenerCLI(records)

    if args.command == "shorten":
        return await cli.shorten(args.url, args.slug)
    if args.command == "get":
        return await cli.get(args.slug)
    if args.command == "stats":
        return await cli.stats(args.slug)
    if args.command == "health":
        return await cli.health()
    return 1


async def _main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if not args.kv_url or not args.kv_token:
        parser.error("--kv-url and --kv-token are required (or KV_REST_API_URL / KV_REST_API_TOKEN)")

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    store = create_store(args.kv_url, args.kv_token, logger=logger)
    records = RecordStore(store=store, generator=SlugGenerator(logger=logger), logger=logger)

    try:
        return await run(args, records)
    finally:
        await records.close()


def main() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(_main()))


if __name__ == "__main__":
    main()
