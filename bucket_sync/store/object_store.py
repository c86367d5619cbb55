from __future__ import annotations

from dataclasses import dataclass, field
from typing import BinaryIO, Protocol


@dataclass(frozen=True)
class ListPage:
    """One page of a bucket listing.

    ``keys`` are full store keys in listing order; ``truncated`` is True when
    the store holds more keys after the last one returned.
    """

    keys: list[str] = field(default_factory=list)
    truncated: bool = False


class ObjectStore(Protocol):
    """Object store abstraction addressed by bucket name and full key.

    Adapters own connection setup, credentials and transport-level retries.
    """

    def list_page(
        self, bucket: str, prefix: str | None = None, start_after: str | None = None
    ) -> ListPage:
        """Return the next page of keys under prefix, strictly after start_after."""

    def get_object(self, bucket: str, key: str) -> BinaryIO:
        """Open the object body as a readable stream (ObjectNotFoundError if absent)."""

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """Write body to key, overwriting any existing object."""
