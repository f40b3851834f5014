"""ISO-8601 text for the ``Expires`` field.

UTC timestamps are written with a ``Z`` suffix, the form used by the
RFC 6415 examples. Parsing accepts anything ``datetime.fromisoformat``
does, including the ``Z`` suffix.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from xrdctl.domain.errors import FormatError


def parse_timestamp(text: str) -> datetime:
    """Parse ISO-8601 *text*, raising :class:`FormatError` on failure."""
    if not isinstance(text, str):
        msg = f"Expected an ISO-8601 timestamp string, got {type(text).__name__}"
        raise FormatError(msg)
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError as exc:
        msg = f"Invalid ISO-8601 timestamp: {text!r}"
        raise FormatError(msg) from exc


def format_timestamp(value: datetime) -> str:
    """Render *value* as ISO-8601 text."""
    text = value.isoformat()
    if value.utcoffset() == timedelta(0) and text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text
