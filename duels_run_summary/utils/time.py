from __future__ import annotations

from datetime import datetime, timezone

from dateutil import parser


def parse_datetime(value: str | int | float | datetime | None) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        # epoch millis from the client, seconds otherwise
        seconds = value / 1000 if value > 10**11 else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    try:
        return parser.isoparse(value)
    except (ValueError, TypeError):
        try:
            return parser.parse(value)
        except (ValueError, TypeError, OverflowError):
            return None


def to_iso(value: str | int | float | datetime | None) -> str | None:
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return parsed.isoformat()
