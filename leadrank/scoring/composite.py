"""
Composite score + quality tier.

composite = name + email + phone + recency + intake (max 120). The tier is
read off a fixed threshold table, so it is always derivable from the
composite alone and identical scores land in identical tiers across runs.
"""
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from leadrank.records import LeadRecord
from leadrank.scoring.config import config_value
from leadrank.scoring.fields import (
    detect_country,
    is_valid_email,
    normalize_phone,
    score_email,
    score_intake_proximity,
    score_name,
    score_phone,
)
from leadrank.scoring.recency import RecencyBounds, score_recency

TIERS = ('High', 'Medium', 'Low', 'Very Low')
LOWEST_TIER = 'Very Low'


@dataclass(frozen=True)
class LeadScore:
    """Full breakdown for one lead."""
    name_score: int
    email_score: int
    phone_score: int
    recency_score: int
    intake_score: int
    composite_score: int
    quality_tier: str
    email_valid: bool = False
    phone_valid: bool = False
    detected_country: str = 'Unknown'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def derived_fields(self) -> Dict[str, Any]:
        """The fields written back onto the lead."""
        return {
            'name_score': self.name_score,
            'composite_score': self.composite_score,
            'quality_tier': self.quality_tier,
            'country': self.detected_country,
        }


def tier_for_score(score: int, cfg: Optional[Dict[str, Any]] = None) -> str:
    """First tier (high to low) whose min_score the score reaches."""
    tiers = sorted(config_value(cfg, 'tiers'), key=lambda t: t['min_score'], reverse=True)
    for tier in tiers:
        if score >= tier['min_score']:
            return tier['name']
    return LOWEST_TIER


def score_lead(
    record: LeadRecord,
    bounds: RecencyBounds,
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> LeadScore:
    """Score one lead against precomputed batch bounds."""
    name_score = score_name(record.display_name, record.email)
    email_score = score_email(record.email)
    phone_score = score_phone(record.phone, cfg)
    recency_score = score_recency(record.effective_created_at, bounds, cfg)
    intake_score = score_intake_proximity(record.intake_period, today=today, cfg=cfg)

    composite = name_score + email_score + phone_score + recency_score + intake_score

    return LeadScore(
        name_score=name_score,
        email_score=email_score,
        phone_score=phone_score,
        recency_score=recency_score,
        intake_score=intake_score,
        composite_score=composite,
        quality_tier=tier_for_score(composite, cfg),
        email_valid=is_valid_email(record.email),
        phone_valid=len(normalize_phone(record.phone)) >= 10,
        detected_country=detect_country(record.phone, cfg),
    )
