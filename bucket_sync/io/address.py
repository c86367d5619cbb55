from __future__ import annotations

import re
from dataclasses import dataclass

_SCHEME_MARKER = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


@dataclass(frozen=True)
class BucketAddress:
    """A bucket name plus an optional sub-path prefix.

    ``prefix`` is ``None`` for the whole bucket; otherwise it is non-empty and
    carries no leading or trailing slash.
    """

    name: str
    prefix: str | None = None

    @property
    def uri(self) -> str:
        if self.prefix:
            return f"s3://{self.name}/{self.prefix}"
        return f"s3://{self.name}"

    def __str__(self) -> str:
        return self.uri


def strip_scheme(value: str) -> str:
    """Drop a leading ``<scheme>://`` marker; other input is returned as is."""

    return _SCHEME_MARKER.sub("", value, count=1)


def parse_bucket_address(value: str) -> BucketAddress:
    """Parse ``[<scheme>://]<bucket>[/<subpath>]`` into a :class:`BucketAddress`.

    This never fails: input without a slash becomes the bucket name as a whole,
    and a path made only of slashes normalizes to ``prefix=None``.
    """

    remainder = strip_scheme(value or "")
    name, sep, raw_path = remainder.partition("/")
    prefix: str | None = None
    if sep:
        normalized = raw_path.strip("/")
        prefix = normalized or None
    return BucketAddress(name=name, prefix=prefix)
