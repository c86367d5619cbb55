"""Copy objects missing from a destination bucket prefix.

The run is a small state machine::

    INIT -> CLIENTS_READY -> ENUMERATED -> DIFFED -> TRANSFERRING -> DONE

with ``FAILED`` reachable from every state. Everything happens on the calling
thread, one store call at a time, and the first error stops the run.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass
from enum import Enum

from bucket_sync.diff import diff_keys
from bucket_sync.enumeration import CursorStrategy, check_cancelled, enumerate_keys
from bucket_sync.errors import BucketSyncError, ClientInitError, TransferError
from bucket_sync.io.address import BucketAddress, parse_bucket_address
from bucket_sync.io.keys import format_key
from bucket_sync.observability import log_event, resolve_logger
from bucket_sync.store.object_store import ObjectStore

StoreFactory = Callable[[str, str], ObjectStore]


class SyncState(str, Enum):
    INIT = "init"
    CLIENTS_READY = "clients_ready"
    ENUMERATED = "enumerated"
    DIFFED = "diffed"
    TRANSFERRING = "transferring"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncResult:
    source_key_count: int
    destination_key_count: int
    missing_keys: tuple[str, ...]
    transferred_keys: tuple[str, ...]
    dry_run: bool = False

    @property
    def transferred_count(self) -> int:
        return len(self.transferred_keys)


def _as_address(value: BucketAddress | str) -> BucketAddress:
    if isinstance(value, BucketAddress):
        return value
    return parse_bucket_address(value)


class SyncOrchestrator:
    """Run one source -> destination sync.

    ``store_factory(profile, side)`` returns a ready :class:`ObjectStore`, where
    ``side`` is ``"source"`` or ``"destination"``.
    """

    def __init__(
        self,
        store_factory: StoreFactory,
        *,
        cursor: CursorStrategy = CursorStrategy.FULL_KEY,
        dry_run: bool = False,
        logger: logging.Logger | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._store_factory = store_factory
        self.cursor = CursorStrategy(cursor)
        self.dry_run = dry_run
        self.cancel_event = cancel_event
        self._logger = resolve_logger(logger, __name__)
        self._state = SyncState.INIT
        self.error: BaseException | None = None

    @property
    def state(self) -> SyncState:
        return self._state

    def _transition(self, state: SyncState) -> None:
        self._state = state
        log_event(self._logger, "sync.state", state=state.value)

    def _connect(self, profile: str, side: str) -> ObjectStore:
        check_cancelled(self.cancel_event)
        try:
            return self._store_factory(profile, side)
        except ClientInitError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ClientInitError(profile, str(exc) or type(exc).__name__) from exc

    def _transfer(
        self,
        key: str,
        *,
        source: BucketAddress,
        source_store: ObjectStore,
        destination: BucketAddress,
        destination_store: ObjectStore,
    ) -> None:
        get_key = format_key(source.prefix, key)
        put_key = format_key(destination.prefix, key)
        log_event(
            self._logger,
            "sync.transfer",
            key=key,
            source=source.name,
            get_key=get_key,
            destination=destination.name,
            put_key=put_key,
        )

        check_cancelled(self.cancel_event)
        try:
            body = source_store.get_object(source.name, get_key)
        except Exception as exc:  # noqa: BLE001
            raise TransferError(key, "get", str(exc) or type(exc).__name__) from exc

        with closing(body):
            check_cancelled(self.cancel_event)
            try:
                destination_store.put_object(destination.name, put_key, body)
            except Exception as exc:  # noqa: BLE001
                raise TransferError(key, "put", str(exc) or type(exc).__name__) from exc

        log_event(
            self._logger,
            "sync.transferred",
            key=key,
            destination=destination.name,
            put_key=put_key,
        )

    def run(
        self,
        source: BucketAddress | str,
        source_profile: str,
        destination: BucketAddress | str,
        destination_profile: str,
    ) -> SyncResult:
        if self._state is not SyncState.INIT:
            raise BucketSyncError(f"orchestrator already ran (state={self._state.value})")

        try:
            return self._run(
                _as_address(source),
                source_profile,
                _as_address(destination),
                destination_profile,
            )
        except BaseException as exc:
            self.error = exc
            self._state = SyncState.FAILED
            log_event(
                self._logger,
                "sync.failed",
                level=logging.ERROR,
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise

    def _run(
        self,
        source: BucketAddress,
        source_profile: str,
        destination: BucketAddress,
        destination_profile: str,
    ) -> SyncResult:
        log_event(
            self._logger,
            "sync.start",
            source=source.uri,
            destination=destination.uri,
            cursor=self.cursor.value,
            dry_run=self.dry_run,
        )
        source_store = self._connect(source_profile, "source")
        destination_store = self._connect(destination_profile, "destination")
        self._transition(SyncState.CLIENTS_READY)

        source_keys = enumerate_keys(
            source_store,
            source,
            cursor=self.cursor,
            logger=self._logger,
            cancel_event=self.cancel_event,
        )
        destination_keys = enumerate_keys(
            destination_store,
            destination,
            cursor=self.cursor,
            logger=self._logger,
            cancel_event=self.cancel_event,
        )
        self._transition(SyncState.ENUMERATED)

        missing_keys = diff_keys(source_keys, destination_keys)
        log_event(
            self._logger,
            "sync.keys",
            source_key_count=len(source_keys),
            destination_key_count=len(destination_keys),
            missing_key_count=len(missing_keys),
        )
        self._transition(SyncState.DIFFED)

        transferred: list[str] = []
        if not self.dry_run:
            self._transition(SyncState.TRANSFERRING)
            for key in missing_keys:
                self._transfer(
                    key,
                    source=source,
                    source_store=source_store,
                    destination=destination,
                    destination_store=destination_store,
                )
                transferred.append(key)

        self._transition(SyncState.DONE)
        log_event(
            self._logger,
            "sync.done",
            transferred_count=len(transferred),
            dry_run=self.dry_run,
        )
        return SyncResult(
            source_key_count=len(source_keys),
            destination_key_count=len(destination_keys),
            missing_keys=tuple(missing_keys),
            transferred_keys=tuple(transferred),
            dry_run=self.dry_run,
        )


def sync_buckets(
    store_factory: StoreFactory,
    source: BucketAddress | str,
    source_profile: str,
    destination: BucketAddress | str,
    destination_profile: str,
    *,
    cursor: CursorStrategy = CursorStrategy.FULL_KEY,
    dry_run: bool = False,
    logger: logging.Logger | None = None,
    cancel_event: threading.Event | None = None,
) -> SyncResult:
    orchestrator = SyncOrchestrator(
        store_factory,
        cursor=cursor,
        dry_run=dry_run,
        logger=logger,
        cancel_event=cancel_event,
    )
    return orchestrator.run(source, source_profile, destination, destination_profile)
