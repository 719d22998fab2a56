"""
Call queue ordering — which lead a recruiter should contact next.

Leads in a terminal outreach state are dropped first, whatever their flags.
The rest are sorted by:
  1. VIP flag (flagged first)
  2. Intake period (soonest first, unparseable last)
  3. Contact history (never-contacted first)

Python's sort is stable, so leads equal on all three keys keep their
incoming order. An optional country filter narrows the finished queue.
"""
import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from leadrank.records import LeadRecord
from leadrank.scoring.config import config_value, load_scoring_config
from leadrank.scoring.intake import current_date, intake_sort_value

logger = logging.getLogger('callqueue.ordering')


def normalize_status(status: Optional[str]) -> str:
    """'Not-Interested', 'not_interested' and 'notinterested' all compare equal."""
    return re.sub(r'[^a-z0-9]', '', (status or '').lower())


def is_terminal_status(status: Optional[str], cfg: Optional[Dict[str, Any]] = None) -> bool:
    terminal = {normalize_status(s) for s in config_value(cfg, 'terminal_statuses')}
    return normalize_status(status) in terminal


def is_never_contacted(status: Optional[str], cfg: Optional[Dict[str, Any]] = None) -> bool:
    normalized = normalize_status(status)
    if not normalized:
        return True
    return normalized in {normalize_status(s) for s in config_value(cfg, 'never_contacted_statuses')}


def priority_sort_key(
    record: LeadRecord,
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> Tuple[int, int, int]:
    """Ascending sort key: (not flagged, intake YYYYMM, already contacted)."""
    return (
        0 if record.is_priority_flagged else 1,
        intake_sort_value(record.intake_period, today=today, cfg=cfg),
        0 if is_never_contacted(record.outreach_status, cfg) else 1,
    )


def prioritize_leads(
    records: Iterable[LeadRecord],
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
    country: Optional[str] = None,
) -> List[LeadRecord]:
    """
    Drop terminal leads, then order the rest for the call queue.

    With ``country`` set, only leads whose stored country matches are kept;
    the filter runs on the ordered queue so relative order is unchanged.
    """
    if cfg is None:
        cfg = load_scoring_config()
    today = current_date(today)

    records = list(records)
    eligible = [r for r in records if not is_terminal_status(r.outreach_status, cfg)]
    logger.debug("%d leads in, %d eligible for outreach", len(records), len(eligible))

    ordered = sorted(eligible, key=lambda r: priority_sort_key(r, today=today, cfg=cfg))
    if country is not None:
        ordered = [r for r in ordered if r.country == country]
    return ordered


def call_queue_ids(
    records: Iterable[LeadRecord],
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
    country: Optional[str] = None,
) -> List[Any]:
    """Lead ids in call-queue order."""
    return [r.id for r in prioritize_leads(records, today=today, cfg=cfg, country=country)]


def queue_countries(records: Iterable[LeadRecord]) -> List[str]:
    """Distinct stored countries, sorted; leads not yet scored are skipped."""
    return sorted({r.country for r in records if r.country})
