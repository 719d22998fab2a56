"""
Intake period parsing — the one parser shared by scoring and queue ordering.

Free text like "February 2025", "Feb intake", "2025-05" or "10/2025" is
resolved to a (month, year) pair. The intake-proximity scorer and the call
queue's sort key both go through parse_intake(), so a lead that scores high
for an imminent intake also sorts early in the queue.
"""
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Tuple, Union

from leadrank.scoring.config import config_value

# YYYY-M / YYYY/M  or  M-YYYY / M/YYYY
_STRUCTURAL_RE = re.compile(r'(\d{4})[-/](\d{1,2})|(\d{1,2})[-/](\d{4})')
_YEAR_RE = re.compile(r'\b(20\d{2})\b')

# Sort values for intakes without a resolvable month. Both sort after any
# real YYYYMM value; a text that at least yields a year goes first.
PARTIAL_INTAKE_SORT = 999998
NO_INTAKE_SORT = 999999


def current_date(today: Union[date, datetime, None] = None) -> date:
    """Reference date for date-relative rules (defaults to today, UTC)."""
    if today is None:
        return datetime.now(timezone.utc).date()
    if isinstance(today, datetime):
        return today.date()
    return today


def extract_intake(text: Optional[str], cfg: Optional[Dict[str, Any]] = None) -> Tuple[Optional[int], Optional[int]]:
    """
    Pull whatever month and year the text states, without inference.

    Month: first configured keyword found as a case-insensitive substring;
    failing that, a structural YYYY-M / M/YYYY pattern. Year: the structural
    pattern's year if it matched, else any standalone 20xx token.
    """
    if not text or not text.strip():
        return None, None

    lowered = text.lower()
    month = None
    year = None

    for keyword, keyword_month in config_value(cfg, 'intake_months').items():
        if str(keyword).lower() in lowered:
            month = int(keyword_month)
            break

    if month is None:
        match = _STRUCTURAL_RE.search(text)
        if match:
            if match.group(1):
                candidate_year, candidate_month = int(match.group(1)), int(match.group(2))
            else:
                candidate_month, candidate_year = int(match.group(3)), int(match.group(4))
            if 1 <= candidate_month <= 12:
                month, year = candidate_month, candidate_year

    if year is None:
        year_match = _YEAR_RE.search(text)
        if year_match:
            year = int(year_match.group(1))

    return month, year


def parse_intake(
    text: Optional[str],
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> Optional[Tuple[int, int]]:
    """
    Resolve intake text to (month, year), or None when no month resolves.

    A month without a year is assumed to be its next occurrence: this year if
    the month has not passed yet, otherwise next year.
    """
    month, year = extract_intake(text, cfg)
    if month is None:
        return None

    if year is None:
        ref = current_date(today)
        year = ref.year if month >= ref.month else ref.year + 1

    return month, year


def months_until(month: int, year: int, today: Union[date, datetime, None] = None) -> int:
    """Whole calendar months from the reference month to (month, year)."""
    ref = current_date(today)
    return (year - ref.year) * 12 + (month - ref.month)


def intake_sort_value(
    text: Optional[str],
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Ascending sort key for an intake: YYYYMM, e.g. February 2025 -> 202502.

    Text that only yields a year sorts after every resolved intake; blank or
    wholly unparseable text sorts at the very end.
    """
    parsed = parse_intake(text, today=today, cfg=cfg)
    if parsed is not None:
        month, year = parsed
        return year * 100 + month

    _, year = extract_intake(text, cfg)
    if year is not None:
        return PARTIAL_INTAKE_SORT
    return NO_INTAKE_SORT
