from __future__ import annotations

import pytest

from bucket_sync.errors import InvalidKeyError
from bucket_sync.io.keys import format_key, relative_key


def test_format_key_joins_prefix_and_key() -> None:
    assert format_key("a", "b") == "a/b"
    assert format_key("a/b", "c/d.txt") == "a/b/c/d.txt"


def test_format_key_single_part_is_returned_unchanged() -> None:
    assert format_key(None, "b") == "b"
    assert format_key("a", None) == "a"
    assert format_key("", "b") == "b"
    assert format_key("a", "") == "a"


@pytest.mark.parametrize(("prefix", "key"), [(None, None), ("", ""), (None, ""), ("", None)])
def test_format_key_without_parts_raises(prefix: str | None, key: str | None) -> None:
    with pytest.raises(InvalidKeyError):
        format_key(prefix, key)


def test_invalid_key_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        format_key(None, None)


def test_relative_key_strips_prefix_and_one_separator() -> None:
    assert relative_key("data/2024/file.csv", "data") == "2024/file.csv"
    assert relative_key("data//file.csv", "data") == "/file.csv"


def test_relative_key_without_prefix_is_full_key() -> None:
    assert relative_key("file.csv", None) == "file.csv"
    assert relative_key("a/b.csv", "") == "a/b.csv"


def test_relative_key_of_marker_is_empty() -> None:
    assert relative_key("data/", "data") == ""
    assert relative_key("data", "data") == ""
