"""Time utilities: instant coercion and datetime-local helpers."""

from datetime import date, datetime, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC = timezone.utc

INPUT_FORMAT = "%Y-%m-%dT%H:%M"

# Attribute names of "convert to date" capabilities on store-native timestamp wrappers
_TO_DATE_METHODS = ("to_datetime", "to_pydatetime", "ToDatetime")


def now_utc() -> datetime:
    """Current instant, timezone-aware (UTC)."""
    return datetime.now(UTC)


def get_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name, falling back to UTC for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return UTC


def _normalize(dt: datetime, naive_tz: tzinfo) -> datetime:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=naive_tz)
    return dt.astimezone(UTC)


def _parse_text(text: str) -> Optional[datetime]:
    text = text.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_instant(raw: Any, naive_tz: tzinfo = UTC) -> Optional[datetime]:
    """
    Coerce any timestamp-ish value into an aware UTC datetime.

    Accepts store-native timestamp wrappers (anything exposing a callable
    to_datetime / to_pydatetime / ToDatetime), datetime and date values,
    ISO-8601 strings and None. Naive values are read in ``naive_tz``.
    Anything unusable gives None; this function never raises.
    """
    if raw is None:
        return None

    if not isinstance(raw, (datetime, date, str)):
        for method_name in _TO_DATE_METHODS:
            method = getattr(raw, method_name, None)
            if callable(method):
                try:
                    converted = method()
                except Exception:
                    return None
                return to_instant(converted, naive_tz) if isinstance(converted, (datetime, date)) else None
        return None

    try:
        if isinstance(raw, datetime):
            return _normalize(raw, naive_tz)
        if isinstance(raw, date):
            return _normalize(datetime(raw.year, raw.month, raw.day), naive_tz)
        parsed = _parse_text(raw)
        return _normalize(parsed, naive_tz) if parsed is not None else None
    except (OverflowError, ValueError):
        # astimezone can overflow near datetime.min / datetime.max
        return None


def to_input_value(raw: Any, tz: tzinfo = UTC) -> str:
    """Render a timestamp as a datetime-local input value ("" when absent)."""
    instant = to_instant(raw)
    if instant is None:
        return ""
    return instant.astimezone(tz).strftime(INPUT_FORMAT)


def from_input_value(text: Optional[str], tz: tzinfo = UTC) -> Optional[datetime]:
    """Read a datetime-local input value in ``tz``; blank or invalid gives None."""
    if not text:
        return None
    return to_instant(text, naive_tz=tz)
