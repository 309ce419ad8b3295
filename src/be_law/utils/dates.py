"""As-of date validation."""
from __future__ import annotations
import re
from datetime import date
from typing import Optional

from be_law.errors import AsOfDateError

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_as_of_date(value: Optional[str]) -> Optional[str]:
    """Return the trimmed ISO date, None when omitted, or raise AsOfDateError.

    Rejects both the wrong shape ('2026/01/01') and impossible calendar dates
    ('2026-02-30').
    """
    if value is None:
        return None
    raw = str(value).strip()
    if not raw:
        return None
    if not ISO_DATE_RE.match(raw):
        raise AsOfDateError('as_of_date must be an ISO date (YYYY-MM-DD)')
    try:
        date.fromisoformat(raw)
    except ValueError as e:
        raise AsOfDateError('as_of_date must be an ISO date (YYYY-MM-DD)') from e
    return raw
