"""Publication date parsing."""

from typing import Optional

import pendulum

# Sort position for missing or unparsable dates.
OLDEST = pendulum.datetime(1, 1, 1, tz="UTC")


def parse_publish_date(value: Optional[str]) -> Optional[pendulum.DateTime]:
    """Parse an article date such as ``2025-11-10`` or ``Nov 03, 2025``.

    Returns None when the value is empty or not a date.
    """
    if not value or not value.strip():
        return None

    try:
        parsed = pendulum.parse(value.strip(), strict=False, tz="UTC")
    except (ValueError, OverflowError, TypeError):
        return None

    if not isinstance(parsed, pendulum.DateTime):
        return None
    return parsed


def publish_sort_key(value: Optional[str]) -> pendulum.DateTime:
    """Sort key placing undated articles last in a newest-first ordering."""
    return parse_publish_date(value) or OLDEST
