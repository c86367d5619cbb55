from __future__ import annotations

import io

import pytest

from bucket_sync.errors import ObjectNotFoundError
from bucket_sync.testing.memory_store import MemoryS3Store


def test_list_page_is_string_prefix_match_in_key_order() -> None:
    store = MemoryS3Store({"b": {"lake/b": b"", "lake/a": b"", "lake2/c": b"", "x": b""}})

    page = store.list_page("b", prefix="lake")

    assert page.keys == ["lake/a", "lake/b", "lake2/c"]
    assert page.truncated is False


def test_list_page_start_after_is_exclusive_and_paged() -> None:
    store = MemoryS3Store({"b": {k: b"" for k in ["a", "b", "c", "d"]}}, page_size=2)

    first = store.list_page("b", start_after="a")
    second = store.list_page("b", start_after=first.keys[-1])

    assert first.keys == ["b", "c"]
    assert first.truncated is True
    assert second.keys == ["d"]
    assert second.truncated is False


def test_put_then_get_round_trips_bytes_and_records_ops() -> None:
    store = MemoryS3Store()
    store.create_bucket("b")

    store.put_object("b", "k", io.BytesIO(b"hello"))

    assert store.get_object("b", "k").read() == b"hello"
    assert [op.name for op in store.ops] == ["put_object", "get_object"]


def test_get_missing_key_raises_not_found() -> None:
    store = MemoryS3Store({"b": {}})

    with pytest.raises(ObjectNotFoundError):
        store.get_object("b", "missing")


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        MemoryS3Store(page_size=0)
