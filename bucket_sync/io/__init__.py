"""Address parsing and key path helpers."""

from bucket_sync.io.address import BucketAddress, parse_bucket_address, strip_scheme
from bucket_sync.io.keys import format_key, relative_key

__all__ = [
    "BucketAddress",
    "format_key",
    "parse_bucket_address",
    "relative_key",
    "strip_scheme",
]
