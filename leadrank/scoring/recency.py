"""
Recency — a lead's age relative to the rest of the batch (0-10).

A timestamp means nothing on its own, so recency is two steps: compute the
oldest/newest creation times across the whole batch once, then place each
lead between them. The bounds are an explicit value passed into
score_recency(), never module state.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from leadrank.records import LeadRecord, parse_timestamp
from leadrank.scoring.config import config_value


@dataclass(frozen=True)
class RecencyBounds:
    """Oldest and newest creation time in a batch; both None for an undated batch."""
    oldest: Optional[datetime] = None
    newest: Optional[datetime] = None

    @property
    def is_degenerate(self) -> bool:
        return self.oldest is None or self.newest is None or self.oldest == self.newest


def compute_recency_bounds(records: Iterable[LeadRecord]) -> RecencyBounds:
    """Min/max effective creation time over every record with a parseable timestamp."""
    stamps = [r.effective_created_at for r in records]
    stamps = [s for s in stamps if s is not None]
    if not stamps:
        return RecencyBounds()
    return RecencyBounds(oldest=min(stamps), newest=max(stamps))


def score_recency(
    created_at: Any,
    bounds: RecencyBounds,
    cfg: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Linear position of created_at between the batch bounds, scaled to 0-10.

    Undated leads and flat batches (oldest == newest) get the neutral default.
    Rounds half up. Timestamps outside the bounds are clamped.
    """
    recency_cfg = config_value(cfg, 'recency')
    neutral = int(recency_cfg.get('neutral_default', 5))
    max_score = int(recency_cfg.get('max_score', 10))

    created = parse_timestamp(created_at)
    if created is None or bounds.is_degenerate:
        return neutral

    span = (bounds.newest - bounds.oldest).total_seconds()
    position = (created - bounds.oldest).total_seconds() / span
    position = max(0.0, min(1.0, position))
    return int(math.floor(position * max_score + 0.5))
