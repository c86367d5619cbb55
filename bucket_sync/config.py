"""Environment-first configuration for store clients and listing."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from bucket_sync.errors import ConfigError

ENV_PREFIX = "BUCKET_SYNC"
SIDES = ("source", "destination")
URL_STYLES = ("auto", "path", "virtual")
MAX_PAGE_SIZE = 1000


@dataclass(frozen=True)
class StoreSettings:
    endpoint_url: str | None = None
    region: str | None = None
    url_style: str = "auto"
    page_size: int | None = None
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    max_attempts: int = 5

    def with_overrides(self, **overrides: object) -> StoreSettings:
        values = {key: value for key, value in overrides.items() if value is not None}
        if not values:
            return self
        return replace(self, **values)


def _lookup(env: Mapping[str, str], side: str | None, name: str) -> str | None:
    candidates = []
    if side:
        candidates.append(f"{ENV_PREFIX}_{side.upper()}_{name}")
    candidates.append(f"{ENV_PREFIX}_{name}")
    for candidate in candidates:
        value = env.get(candidate)
        if value is not None and value.strip():
            return value.strip()
    return None


def _parse_int(name: str, value: str | None, *, minimum: int, maximum: int | None = None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if number < minimum or (maximum is not None and number > maximum):
        upper = f"..{maximum}" if maximum is not None else "+"
        raise ConfigError(f"{name} must be in {minimum}{upper}, got {number}")
    return number


def _parse_float(name: str, value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def validate_page_size(value: int | None) -> int | None:
    if value is None:
        return None
    if value < 1 or value > MAX_PAGE_SIZE:
        raise ConfigError(f"page size must be in 1..{MAX_PAGE_SIZE}, got {value}")
    return value


def load_store_settings(side: str, env: Mapping[str, str] | None = None) -> StoreSettings:
    """Build :class:`StoreSettings` for one side of a sync.

    ``BUCKET_SYNC_<SIDE>_<NAME>`` wins over ``BUCKET_SYNC_<NAME>``.
    """

    if side not in SIDES:
        raise ConfigError(f"side must be one of {SIDES}, got {side!r}")
    env = os.environ if env is None else env

    url_style = _lookup(env, side, "URL_STYLE") or "auto"
    if url_style not in URL_STYLES:
        raise ConfigError(f"URL_STYLE must be one of {URL_STYLES}, got {url_style!r}")

    defaults = StoreSettings()
    connect_timeout = _parse_float("CONNECT_TIMEOUT", _lookup(env, side, "CONNECT_TIMEOUT"))
    read_timeout = _parse_float("READ_TIMEOUT", _lookup(env, side, "READ_TIMEOUT"))
    max_attempts = _parse_int("MAX_ATTEMPTS", _lookup(env, side, "MAX_ATTEMPTS"), minimum=1)

    return StoreSettings(
        endpoint_url=_lookup(env, side, "ENDPOINT_URL"),
        region=_lookup(env, side, "REGION"),
        url_style=url_style,
        page_size=_parse_int(
            "PAGE_SIZE", _lookup(env, side, "PAGE_SIZE"), minimum=1, maximum=MAX_PAGE_SIZE
        ),
        connect_timeout=connect_timeout or defaults.connect_timeout,
        read_timeout=read_timeout or defaults.read_timeout,
        max_attempts=max_attempts or defaults.max_attempts,
    )


def load_cursor_name(env: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if env is None else env
    return _lookup(env, None, "CURSOR")
