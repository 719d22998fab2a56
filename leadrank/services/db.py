"""
Postgres persistence helpers — the storage side of the recompute job and
the call queue.

Reads map Lead rows onto storage-agnostic LeadRecords. write_lead_scores()
writes one lead's derived fields in its own transaction and re-raises on
failure, so the batch job can count it and move on to the next lead.
"""
import logging
from datetime import datetime, timezone
from typing import List

from leadrank.database import get_session
from leadrank.models.lead import Lead
from leadrank.records import LeadRecord
from leadrank.scoring.composite import LeadScore

logger = logging.getLogger('services.db')


def lead_to_record(lead: Lead) -> LeadRecord:
    """Map a Lead row onto the in-memory record the scorers read."""
    return LeadRecord(
        id=lead.id,
        display_name=lead.prospect_name,
        email=lead.prospect_email,
        phone=lead.phone,
        created_at=lead.created_time,
        record_created_at=lead.created_at,
        intake_period=lead.intake,
        outreach_status=lead.contact_status,
        is_priority_flagged=bool(lead.is_priority),
        name_score=lead.name_score,
        composite_score=lead.lead_score,
        quality_tier=lead.lead_quality,
        country=lead.country,
    )


def fetch_active_leads() -> List[LeadRecord]:
    """
    Every lead that has not been soft-deleted, in id order.

    No pagination: recency normalization needs the true min/max over the
    whole dataset.
    """
    session = get_session()
    try:
        rows = (
            session.query(Lead)
            .filter(Lead.deleted_at.is_(None))
            .order_by(Lead.id)
            .all()
        )
        records = [lead_to_record(row) for row in rows]
        logger.info("Fetched %d active leads", len(records))
        return records
    finally:
        session.close()


def fetch_outreach_candidates() -> List[LeadRecord]:
    """
    Active leads for the call queue.

    Terminal outreach statuses are excluded by the queue ordering itself, so
    a status typo in the database can never leak a closed lead into the queue.
    """
    return fetch_active_leads()


def write_lead_scores(lead_id, score: LeadScore):
    """
    UPDATE one lead's derived score columns.

    Raises LookupError for an unknown id; database errors are rolled back and
    re-raised.
    """
    session = get_session()
    try:
        lead = session.get(Lead, lead_id)
        if lead is None:
            raise LookupError(f"Lead {lead_id} not found")

        lead.name_score = score.name_score
        lead.lead_score = score.composite_score
        lead.lead_quality = score.quality_tier
        lead.country = score.detected_country
        lead.scored_at = datetime.now(timezone.utc)

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
