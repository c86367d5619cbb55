from __future__ import annotations

from collections.abc import Iterable, Sequence


def diff_keys(source_keys: Sequence[str], destination_keys: Iterable[str]) -> list[str]:
    """Return source keys missing from the destination, in source order.

    Membership is exact string equality. Empty keys (prefix markers) are never
    part of the result.
    """

    present = set(destination_keys)
    return [key for key in source_keys if key and key not in present]
