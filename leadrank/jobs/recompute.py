"""
Batch recompute — rescore every active lead and write the results back.

One pass:
  1. Compute recency bounds over the WHOLE batch (once, read-only after)
  2. Score every lead against those bounds
  3. Write each lead's derived fields individually
  4. Report processed / failed counts + tier distribution

A failed write is retried, then logged and counted; it never stops the pass.
Scores are pure functions of the lead, the batch bounds and the reference
date, so re-running on unchanged data rewrites identical values.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from leadrank.config import RECOMPUTE_JOB_TIMEOUT, RECOMPUTE_QUEUE
from leadrank.records import LeadRecord
from leadrank.scoring.composite import LeadScore, score_lead
from leadrank.scoring.config import config_value, load_scoring_config
from leadrank.scoring.intake import current_date
from leadrank.scoring.recency import compute_recency_bounds

logger = logging.getLogger('jobs.recompute')

ScoreWriter = Callable[[Any, LeadScore], None]


@dataclass
class RecomputeSummary:
    """Outcome of one recompute pass."""
    processed: int = 0
    failed: int = 0
    tier_counts: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'processed': self.processed,
            'failed': self.failed,
            'tier_counts': dict(self.tier_counts),
        }


def recompute_scores(
    records: Iterable[LeadRecord],
    write: Optional[ScoreWriter] = None,
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> RecomputeSummary:
    """
    Score a full dataset and hand each result to ``write(lead_id, score)``.

    ``records`` must be every active lead, not a page of them: recency is
    normalized against the batch min/max. With ``write=None`` nothing is
    persisted (dry run) and every scored lead counts as processed.
    """
    records = list(records)
    if cfg is None:
        cfg = load_scoring_config()
    today = current_date(today)
    attempts = max(1, int(config_value(cfg, 'write_attempts')))

    bounds = compute_recency_bounds(records)
    logger.info(
        "Recomputing %d leads (oldest=%s, newest=%s, today=%s)",
        len(records), bounds.oldest, bounds.newest, today,
    )

    summary = RecomputeSummary(
        tier_counts={tier['name']: 0 for tier in config_value(cfg, 'tiers')},
    )

    for record in records:
        score = score_lead(record, bounds, today=today, cfg=cfg)
        summary.tier_counts[score.quality_tier] = summary.tier_counts.get(score.quality_tier, 0) + 1

        if score.intake_score > 0:
            logger.debug(
                "Lead %s: intake=%r -> +%d (total=%d, quality=%s)",
                record.id, record.intake_period, score.intake_score,
                score.composite_score, score.quality_tier,
            )

        if write is None:
            summary.processed += 1
            continue

        if _write_with_retry(write, record.id, score, attempts, summary):
            summary.processed += 1
        else:
            summary.failed += 1

    logger.info(
        "Recompute complete: %d processed, %d failed, tiers=%s",
        summary.processed, summary.failed, summary.tier_counts,
    )
    return summary


def _write_with_retry(write: ScoreWriter, lead_id, score: LeadScore, attempts: int, summary: RecomputeSummary) -> bool:
    for attempt in range(1, attempts + 1):
        try:
            write(lead_id, score)
            return True
        except Exception as e:
            if attempt < attempts:
                logger.warning("Write failed for lead %s (attempt %d/%d): %s", lead_id, attempt, attempts, e)
                continue
            logger.error("Failed to update lead %s after %d attempts", lead_id, attempts, exc_info=True)
            summary.errors.append(f"{lead_id}: {e}")
    return False


# ── Database-backed job (enqueued via RQ) ─────────────────────────────────────

def run_recompute_job(today: Optional[str] = None, dry_run: bool = False) -> Dict[str, Any]:
    """
    Recompute every active lead in the database.

    ``today`` is an ISO date string (RQ serializes job args) and defaults to
    the current date. Returns the summary dict.
    """
    from leadrank.services.db import fetch_active_leads, write_lead_scores

    ref = date.fromisoformat(today) if today else None
    records = fetch_active_leads()
    summary = recompute_scores(
        records,
        write=None if dry_run else write_lead_scores,
        today=ref,
    )
    return summary.to_dict()


_queue = None


def _get_queue():
    global _queue
    if _queue is None:
        from leadrank.extensions import redis_client
        from rq import Queue
        _queue = Queue(RECOMPUTE_QUEUE, connection=redis_client)
    return _queue


def enqueue_recompute(today: Optional[str] = None):
    """Enqueue run_recompute_job as a background RQ job and return the job."""
    job = _get_queue().enqueue(run_recompute_job, today, job_timeout=RECOMPUTE_JOB_TIMEOUT)
    logger.info("Enqueued recompute job %s", job.id)
    return job
