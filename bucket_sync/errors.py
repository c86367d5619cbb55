from __future__ import annotations


class BucketSyncError(Exception):
    """Base error for bucket_sync."""


class ConfigError(BucketSyncError):
    """Raised when environment or CLI configuration is invalid."""


class ClientInitError(BucketSyncError):
    """Raised when a store client cannot be built for a profile."""

    def __init__(self, profile: str, message: str | None = None) -> None:
        self.profile = profile
        detail = message or "client setup failed"
        super().__init__(f"profile={profile}: {detail}")


class EnumerationError(BucketSyncError):
    """Raised when a listing page request fails."""

    def __init__(self, bucket: str, prefix: str | None, message: str | None = None) -> None:
        self.bucket = bucket
        self.prefix = prefix
        detail = message or "listing failed"
        super().__init__(f"bucket={bucket} prefix={prefix or ''}: {detail}")


class InvalidKeyError(BucketSyncError, ValueError):
    """Raised when a store key cannot be built from the given parts."""


class ObjectNotFoundError(BucketSyncError):
    """Raised by stores when a requested object does not exist."""

    def __init__(self, bucket: str, key: str) -> None:
        self.bucket = bucket
        self.key = key
        super().__init__(f"object not found: bucket={bucket} key={key}")


class TransferError(BucketSyncError):
    """Raised when copying a single key fails (get or put)."""

    def __init__(self, key: str, stage: str, message: str | None = None) -> None:
        self.key = key
        self.stage = stage
        detail = message or "transfer failed"
        super().__init__(f"key={key} stage={stage}: {detail}")


class SyncCancelledError(BucketSyncError):
    """Raised when a run observes its cancel signal."""
