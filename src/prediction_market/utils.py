"""Shared utilities for the prediction market service."""
import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Generate a random identifier for markets and bets."""
    return str(uuid.uuid4())


def utcnow_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def parse_iso(value: str | None) -> datetime | None:
    """Parse an ISO date or datetime string into an aware UTC datetime; None if unparsable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
