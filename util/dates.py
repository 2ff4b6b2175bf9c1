"""
util/dates.py

Date helpers for provider timestamps.
- unix_to_iso_date: numeric Unix seconds -> ISO calendar date (UTC)
- text_to_iso_date: provider text timestamp ("2024-05-01 12:00:00") -> ISO calendar date

Dates are always ISO-8601 (YYYY-MM-DD) so output does not depend on the host locale.
"""

from datetime import datetime, timezone

from dateutil import parser


ISO_DATE_FMT = "%Y-%m-%d"


def unix_to_iso_date(ts):
    """Return the UTC calendar date of a Unix timestamp in seconds."""
    return datetime.fromtimestamp(float(ts), tz=timezone.utc).strftime(ISO_DATE_FMT)


def text_to_iso_date(text):
    """Return the calendar date written in a text timestamp.

    Only the date portion is used; no timezone conversion is applied.
    Raises ValueError when the text is not a timestamp.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"not a timestamp: {text!r}")
    return parser.isoparse(text.strip().split(" ")[0]).strftime(ISO_DATE_FMT)
