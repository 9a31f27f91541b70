"""Shared timestamp normalization helpers."""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _format_datetime_utc(value: datetime) -> str:
    dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _parse_datetime_token(token: str) -> datetime | None:
    cleaned = token.strip()
    if not cleaned:
        return None
    try:
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in ("%Y/%m/%d", "%Y-%m-%d %H:%M:%S"):
        try:
            return datetime.strptime(cleaned, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def epoch_ms_to_iso(value: Any) -> str | None:
    """Render epoch milliseconds as `YYYY-MM-DDTHH:MM:SS.mmmZ`.

    Zero, missing and non-numeric values yield None, as do values outside the
    representable datetime range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not value or math.isnan(value) or math.isinf(value):
        return None
    try:
        dt = _EPOCH + timedelta(milliseconds=value)
    except (OverflowError, OSError, ValueError):
        return None
    return _format_datetime_utc(dt)


def iso_to_epoch_seconds(value: Any) -> int | None:
    """Floor an ISO timestamp to whole epoch seconds, or None if unparseable."""
    if not isinstance(value, str):
        return None
    parsed = _parse_datetime_token(value)
    if parsed is None:
        return None
    dt = parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())
