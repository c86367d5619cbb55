"""Walk a bucket prefix page by page and collect relative keys."""

from __future__ import annotations

import logging
import threading
from enum import Enum

from bucket_sync.errors import EnumerationError, SyncCancelledError
from bucket_sync.io.address import BucketAddress
from bucket_sync.io.keys import relative_key
from bucket_sync.observability import log_event, resolve_logger
from bucket_sync.store.object_store import ListPage, ObjectStore

_UNSET = object()


class CursorStrategy(str, Enum):
    """How the next page's ``start_after`` cursor is chosen.

    ``FULL_KEY`` follows the store's ``truncated`` flag and resumes after the
    last full key seen. ``RELATIVE_KEY`` keeps the older loop that resumes after
    the last *relative* key and stops once two pages end on the same key; it is
    only exact for buckets listed without a prefix.
    """

    FULL_KEY = "full_key"
    RELATIVE_KEY = "relative_key"


def check_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SyncCancelledError("run cancelled")


def _request_page(
    store: ObjectStore,
    address: BucketAddress,
    *,
    list_prefix: str | None,
    start_after: str | None,
    cancel_event: threading.Event | None,
) -> ListPage:
    check_cancelled(cancel_event)
    try:
        return store.list_page(address.name, prefix=list_prefix, start_after=start_after)
    except Exception as exc:  # noqa: BLE001
        raise EnumerationError(address.name, address.prefix, str(exc) or type(exc).__name__) from exc


def _enumerate_by_full_key(
    store: ObjectStore,
    address: BucketAddress,
    logger: logging.Logger,
    cancel_event: threading.Event | None,
) -> tuple[list[str], int]:
    list_prefix = f"{address.prefix}/" if address.prefix else None
    keys: list[str] = []
    start_after: str | None = None
    pages = 0
    while True:
        page = _request_page(
            store,
            address,
            list_prefix=list_prefix,
            start_after=start_after,
            cancel_event=cancel_event,
        )
        pages += 1
        for full_key in page.keys:
            key = relative_key(full_key, address.prefix)
            if key:
                keys.append(key)
        log_event(
            logger,
            "enumerate.page",
            level=logging.DEBUG,
            bucket=address.name,
            prefix=address.prefix,
            page=pages,
            key_count=len(page.keys),
            truncated=page.truncated,
        )
        if not page.truncated or not page.keys:
            break
        start_after = page.keys[-1]
    return keys, pages


def _enumerate_by_relative_key(
    store: ObjectStore,
    address: BucketAddress,
    logger: logging.Logger,
    cancel_event: threading.Event | None,
) -> tuple[list[str], int]:
    keys: list[str] = []
    last_key: object = _UNSET
    current_key: str | None = None
    pages = 0
    while last_key != current_key:
        last_key = current_key
        page = _request_page(
            store,
            address,
            list_prefix=address.prefix,
            start_after=current_key,
            cancel_event=cancel_event,
        )
        pages += 1
        # Empty keys are kept here; diff_keys drops them.
        keys.extend(relative_key(full_key, address.prefix) for full_key in page.keys)
        log_event(
            logger,
            "enumerate.page",
            level=logging.DEBUG,
            bucket=address.name,
            prefix=address.prefix,
            page=pages,
            key_count=len(page.keys),
        )
        if keys:
            current_key = keys[-1]
    return keys, pages


def enumerate_keys(
    store: ObjectStore,
    address: BucketAddress,
    *,
    cursor: CursorStrategy = CursorStrategy.FULL_KEY,
    logger: logging.Logger | None = None,
    cancel_event: threading.Event | None = None,
) -> list[str]:
    """Return every relative key under ``address`` in listing order.

    Any failure from the store is raised as :class:`EnumerationError`; no
    partial key list is ever returned.
    """

    log = resolve_logger(logger, __name__)
    strategy = CursorStrategy(cursor)
    if strategy is CursorStrategy.RELATIVE_KEY:
        keys, pages = _enumerate_by_relative_key(store, address, log, cancel_event)
    else:
        keys, pages = _enumerate_by_full_key(store, address, log, cancel_event)

    log_event(
        log,
        "enumerate.done",
        bucket=address.name,
        prefix=address.prefix,
        cursor=strategy.value,
        pages=pages,
        key_count=len(keys),
    )
    return keys
