"""
LeadRecord — the in-memory shape every scoring and ordering function reads.

Storage-agnostic: rows from the database, CSV imports and test fixtures are
all mapped onto this dataclass before scoring. Only the derived fields
(name_score, composite_score, quality_tier, country) are ever written back.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

Timestamp = Union[datetime, str, None]


@dataclass
class LeadRecord:
    id: Any
    display_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Timestamp = None           # intake timestamp from the lead source
    record_created_at: Timestamp = None    # administrative row creation time
    intake_period: Optional[str] = None    # "February 2025", "2025-05", "10/2025"
    outreach_status: Optional[str] = None
    is_priority_flagged: bool = False

    # Derived — written back by the recompute job
    name_score: Optional[int] = None
    composite_score: Optional[int] = None
    quality_tier: Optional[str] = None
    country: Optional[str] = None

    @property
    def effective_created_at(self) -> Optional[datetime]:
        """Creation time used for recency, falling back to the admin timestamp."""
        parsed = parse_timestamp(self.created_at)
        if parsed is None:
            parsed = parse_timestamp(self.record_created_at)
        return parsed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeadRecord':
        """Build a record from a loose dict (import rows, API payloads)."""
        return cls(
            id=data.get('id'),
            display_name=data.get('display_name') or data.get('name'),
            email=data.get('email'),
            phone=data.get('phone'),
            created_at=data.get('created_at'),
            record_created_at=data.get('record_created_at'),
            intake_period=data.get('intake_period') or data.get('intake'),
            outreach_status=data.get('outreach_status'),
            is_priority_flagged=bool(data.get('is_priority_flagged', False)),
            name_score=data.get('name_score'),
            composite_score=data.get('composite_score'),
            quality_tier=data.get('quality_tier'),
            country=data.get('country'),
        )


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """
    Coerce a datetime or ISO-8601 string to an aware UTC datetime.

    Accepts Postgres text output too (space separator, short "+00" offset).
    Naive values are taken as UTC. Anything unparseable returns None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            dt = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
