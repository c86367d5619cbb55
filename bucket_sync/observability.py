from __future__ import annotations

import logging
from collections.abc import Mapping


def _kv_pairs(fields: Mapping[str, object]) -> str:
    parts: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        text = str(value).strip()
        if not text:
            continue
        parts.append(f"{key}={text}")
    return " ".join(parts)


def log_event(
    logger: logging.Logger, message: str, *, level: int = logging.INFO, **fields: object
) -> None:
    """Emit a stable, grep-friendly structured log line.

    Fields are rendered as ``k=v`` tokens after the message; ``None`` and blank
    values are dropped.
    """

    if not logger.isEnabledFor(level):
        return
    suffix = _kv_pairs(fields)
    if suffix:
        logger.log(level, "%s %s", message, suffix)
    else:
        logger.log(level, "%s", message)


def resolve_logger(logger: logging.Logger | None, default_name: str) -> logging.Logger:
    """Return the injected logger, or the module logger named ``default_name``."""

    return logger if logger is not None else logging.getLogger(default_name)
