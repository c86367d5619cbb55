from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping

from bucket_sync.config import (
    SIDES,
    StoreSettings,
    load_cursor_name,
    load_store_settings,
    validate_page_size,
)
from bucket_sync.enumeration import CursorStrategy
from bucket_sync.errors import BucketSyncError, ConfigError
from bucket_sync.store.object_store import ObjectStore
from bucket_sync.store.stores import Boto3S3Store
from bucket_sync.sync import StoreFactory, SyncOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bucket-sync",
        description="Copy objects present in a source bucket prefix but missing from a destination.",
    )
    parser.add_argument("source", help="source bucket, s3://<bucket_name>[/<path>]")
    parser.add_argument("source_profile", help="AWS profile for the source (see ~/.aws/config)")
    parser.add_argument("destination", help="destination bucket, s3://<bucket_name>[/<path>]")
    parser.add_argument(
        "destination_profile", help="AWS profile for the destination (see ~/.aws/config)"
    )

    parser.add_argument("--dry-run", action="store_true", help="print missing keys only")
    parser.add_argument(
        "--cursor",
        choices=[strategy.value for strategy in CursorStrategy],
        default=None,
        help="listing cursor strategy (default: full_key)",
    )
    parser.add_argument("--page-size", type=int, default=None, help="keys per listing page (1-1000)")
    parser.add_argument("--endpoint-url", type=str, default=None, help="endpoint for both sides")
    parser.add_argument(
        "--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL"
    )
    return parser


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_log_level(value: str) -> str:
    level = (value or "").strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def _resolve_cursor(args: argparse.Namespace, env: Mapping[str, str]) -> CursorStrategy:
    name = args.cursor or load_cursor_name(env) or CursorStrategy.FULL_KEY.value
    try:
        return CursorStrategy(name)
    except ValueError as exc:
        choices = ", ".join(strategy.value for strategy in CursorStrategy)
        raise ConfigError(f"cursor must be one of {choices}, got {name!r}") from exc


def _side_settings(side: str, args: argparse.Namespace, env: Mapping[str, str]) -> StoreSettings:
    settings = load_store_settings(side, env)
    return settings.with_overrides(
        page_size=validate_page_size(args.page_size),
        endpoint_url=args.endpoint_url,
    )


def build_store_factory(args: argparse.Namespace, env: Mapping[str, str]) -> StoreFactory:
    """Build boto3 stores with per-side settings resolved up front."""

    by_side = {side: _side_settings(side, args, env) for side in SIDES}

    def factory(profile: str, side: str) -> ObjectStore:
        return Boto3S3Store.from_profile(profile, by_side[side])

    return factory


def main(argv: list[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    env = os.environ if env is None else env

    try:
        level = _resolve_log_level(args.log_level or env.get("BUCKET_SYNC_LOG_LEVEL") or "INFO")
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            stream=sys.stderr,
        )
        cursor = _resolve_cursor(args, env)
        factory = build_store_factory(args, env)
        orchestrator = SyncOrchestrator(factory, cursor=cursor, dry_run=args.dry_run)
        result = orchestrator.run(
            args.source, args.source_profile, args.destination, args.destination_profile
        )
    except BucketSyncError as exc:
        print(f"bucket-sync: {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if args.dry_run:
        for key in result.missing_keys:
            print(key)
        return 0

    print(f"transferred {result.transferred_count} key(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
