"""Shared utility functions for the affidavit package."""
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y",
]


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists."""
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Parse ISO strings, epoch milliseconds, or datetimes into naive UTC datetimes.

    Unparseable values return ``None`` so the caller can fall back to another
    timestamp instead of failing the whole record.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            parsed = datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug("Epoch timestamp %r is out of range", raw)
            return None
    elif isinstance(raw, str):
        parsed = _parse_timestamp_text(raw.strip())
        if parsed is None:
            logger.debug("Unrecognized timestamp %r", raw)
            return None
    else:
        return None

    if parsed.tzinfo:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_timestamp_text(text: str) -> Optional[datetime]:
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Optional[datetime]) -> str:
    """US-style short date, e.g. ``1/5/2024``."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def format_time(value: Optional[datetime]) -> str:
    """12-hour clock time, e.g. ``2:30 PM``."""
    if value is None:
        return ""
    return value.strftime("%I:%M %p").lstrip("0")
