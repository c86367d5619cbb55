"""Stable public imports for `bucket_sync`.

Lower-level helpers should be imported from their submodules explicitly.
"""

from bucket_sync.diff import diff_keys
from bucket_sync.enumeration import CursorStrategy, enumerate_keys
from bucket_sync.errors import (
    BucketSyncError,
    ClientInitError,
    ConfigError,
    EnumerationError,
    InvalidKeyError,
    ObjectNotFoundError,
    SyncCancelledError,
    TransferError,
)
from bucket_sync.io import BucketAddress, format_key, parse_bucket_address, relative_key
from bucket_sync.store import Boto3S3Store, ListPage, ObjectStore
from bucket_sync.sync import SyncOrchestrator, SyncResult, SyncState, sync_buckets

__all__ = [
    "Boto3S3Store",
    "BucketAddress",
    "BucketSyncError",
    "ClientInitError",
    "ConfigError",
    "CursorStrategy",
    "EnumerationError",
    "InvalidKeyError",
    "ListPage",
    "ObjectNotFoundError",
    "ObjectStore",
    "SyncCancelledError",
    "SyncOrchestrator",
    "SyncResult",
    "SyncState",
    "TransferError",
    "diff_keys",
    "enumerate_keys",
    "format_key",
    "parse_bucket_address",
    "relative_key",
    "sync_buckets",
]
