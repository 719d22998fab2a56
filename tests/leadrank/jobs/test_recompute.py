"""Tests for leadrank.jobs.recompute — batch rescoring and write-back."""
import logging
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from leadrank.config import RECOMPUTE_JOB_TIMEOUT, RECOMPUTE_QUEUE
from leadrank.jobs import recompute
from leadrank.jobs.recompute import (
    RecomputeSummary,
    recompute_scores,
    run_recompute_job,
    enqueue_recompute,
)
from leadrank.models.lead import Lead
from leadrank.scoring.composite import LeadScore
from leadrank.scoring.recency import compute_recency_bounds

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
T_MID = datetime(2024, 1, 6, tzinfo=timezone.utc)
T1 = datetime(2024, 1, 11, tzinfo=timezone.utc)


class RecordingWriter:
    """Collects write(lead_id, score) calls; optionally fails for some ids."""

    def __init__(self, fail_ids=(), fail_times=None):
        self.calls = []
        self.written = {}
        self.fail_ids = set(fail_ids)
        self.fail_times = fail_times
        self._failures = {}

    def __call__(self, lead_id, score):
        self.calls.append(lead_id)
        if lead_id in self.fail_ids:
            n = self._failures.get(lead_id, 0)
            if self.fail_times is None or n < self.fail_times:
                self._failures[lead_id] = n + 1
                raise RuntimeError('boom')
        self.written[lead_id] = score


@pytest.fixture
def batch(make_record):
    """Two complete leads (High) and one empty one (Very Low)."""
    return [
        make_record(id=1),
        make_record(id=2),
        make_record(id=3, display_name=None, email=None, phone=None,
                    intake_period=None, created_at=None),
    ]


# ── recompute_scores ─────────────────────────────────────────────────────────

class TestRecomputeScores:
    """recompute_scores() scores the whole batch and writes each lead."""

    def test_writes_every_lead(self, batch, today):
        writer = RecordingWriter()
        summary = recompute_scores(batch, write=writer, today=today)

        assert summary.processed == 3
        assert summary.failed == 0
        assert summary.errors == []
        assert writer.calls == [1, 2, 3]

    def test_tier_histogram(self, batch, today):
        summary = recompute_scores(batch, write=RecordingWriter(), today=today)
        assert summary.tier_counts == {'High': 2, 'Medium': 0, 'Low': 0, 'Very Low': 1}

    def test_writer_receives_full_breakdown(self, batch, today):
        writer = RecordingWriter()
        recompute_scores(batch, write=writer, today=today)

        score = writer.written[1]
        assert isinstance(score, LeadScore)
        assert score.derived_fields() == {
            'name_score': 38, 'composite_score': 113, 'quality_tier': 'High', 'country': 'Dominican Republic',
        }
        assert writer.written[3].composite_score == 5

    def test_recency_uses_whole_batch(self, make_record, today):
        records = [
            make_record(id='old', created_at=T0),
            make_record(id='mid', created_at=T_MID),
            make_record(id='new', created_at=T1),
        ]
        writer = RecordingWriter()
        recompute_scores(records, write=writer, today=today)
        assert {k: v.recency_score for k, v in writer.written.items()} == {'old': 0, 'mid': 5, 'new': 10}

    def test_bounds_computed_once_per_batch(self, batch, today):
        with patch('leadrank.jobs.recompute.compute_recency_bounds',
                   wraps=compute_recency_bounds) as spy:
            recompute_scores(batch, write=RecordingWriter(), today=today)
        assert spy.call_count == 1

    def test_failed_write_does_not_stop_batch(self, batch, today):
        writer = RecordingWriter(fail_ids={2})
        summary = recompute_scores(batch, write=writer, today=today)

        assert summary.processed == 2
        assert summary.failed == 1
        assert summary.errors == ['2: boom']
        assert set(writer.written) == {1, 3}
        # Failed leads are still scored and counted in the histogram
        assert sum(summary.tier_counts.values()) == 3

    def test_failed_write_is_retried(self, batch, today):
        writer = RecordingWriter(fail_ids={2})
        recompute_scores(batch, write=writer, today=today)
        assert writer.calls == [1, 2, 2, 3]

    def test_transient_failure_recovers_on_retry(self, batch, today):
        writer = RecordingWriter(fail_ids={1}, fail_times=1)
        summary = recompute_scores(batch, write=writer, today=today)

        assert summary.processed == 3
        assert summary.failed == 0
        assert writer.calls == [1, 1, 2, 3]

    def test_write_attempts_from_config(self, batch, today):
        writer = RecordingWriter(fail_ids={2})
        recompute_scores(batch, write=writer, today=today, cfg={'write_attempts': 1})
        assert writer.calls == [1, 2, 3]

    def test_failure_logged_with_lead_id(self, batch, today, caplog):
        with caplog.at_level(logging.WARNING, logger='jobs.recompute'):
            recompute_scores(batch, write=RecordingWriter(fail_ids={2}), today=today)
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert 'lead 2' in errors[0].getMessage()

    def test_dry_run_writes_nothing(self, batch, today):
        summary = recompute_scores(batch, write=None, today=today)
        assert summary.processed == 3
        assert summary.failed == 0
        assert summary.tier_counts['High'] == 2

    def test_rerun_is_idempotent(self, batch, today):
        first, second = RecordingWriter(), RecordingWriter()
        recompute_scores(batch, write=first, today=today)
        recompute_scores(batch, write=second, today=today)
        assert first.written == second.written

    def test_empty_batch(self, today):
        summary = recompute_scores([], write=RecordingWriter(), today=today)
        assert summary.processed == 0
        assert summary.failed == 0
        assert summary.tier_counts == {'High': 0, 'Medium': 0, 'Low': 0, 'Very Low': 0}

    def test_accepts_generator(self, batch, today):
        writer = RecordingWriter()
        summary = recompute_scores((r for r in batch), write=writer, today=today)
        assert summary.processed == 3
        assert writer.written[1].recency_score == 5


class TestRecomputeSummary:

    def test_to_dict(self):
        summary = RecomputeSummary(processed=4, failed=1, tier_counts={'High': 5}, errors=['x'])
        assert summary.to_dict() == {'processed': 4, 'failed': 1, 'tier_counts': {'High': 5}}


# ── run_recompute_job (database-backed) ──────────────────────────────────────

@pytest.fixture
def seeded_leads(db_session):
    active = Lead(
        prospect_name='Maria Lopez',
        prospect_email='maria.lopez@example.com',
        phone='+18095551234',
        intake='February 2025',
        created_time=datetime(2024, 12, 1, tzinfo=timezone.utc),
    )
    deleted = Lead(
        prospect_name='Old Lead',
        prospect_email='old@example.com',
        phone='+18095550000',
        intake='May 2025',
        deleted_at=datetime(2024, 11, 1, tzinfo=timezone.utc),
    )
    db_session.add_all([active, deleted])
    db_session.commit()
    return active.id, deleted.id


class TestRunRecomputeJob:
    """run_recompute_job() rescores active leads in the database."""

    def test_updates_active_leads(self, patch_db_service_session, db_session, seeded_leads):
        active_id, _ = seeded_leads

        result = run_recompute_job(today='2024-12-10')

        assert result == {
            'processed': 1,
            'failed': 0,
            'tier_counts': {'High': 1, 'Medium': 0, 'Low': 0, 'Very Low': 0},
        }
        db_session.expire_all()
        row = db_session.get(Lead, active_id)
        assert row.name_score == 38
        assert row.lead_score == 113
        assert row.lead_quality == 'High'
        assert row.country == 'Dominican Republic'
        assert row.scored_at is not None

    def test_soft_deleted_leads_untouched(self, patch_db_service_session, db_session, seeded_leads):
        _, deleted_id = seeded_leads
        run_recompute_job(today='2024-12-10')
        db_session.expire_all()
        assert db_session.get(Lead, deleted_id).lead_score is None

    def test_dry_run_leaves_rows_unchanged(self, patch_db_service_session, db_session, seeded_leads):
        active_id, _ = seeded_leads
        result = run_recompute_job(today='2024-12-10', dry_run=True)

        assert result['processed'] == 1
        db_session.expire_all()
        row = db_session.get(Lead, active_id)
        assert row.lead_score is None
        assert row.scored_at is None


# ── enqueue_recompute ────────────────────────────────────────────────────────

class TestEnqueueRecompute:

    def test_enqueues_job_with_timeout(self):
        queue = MagicMock()
        queue.enqueue.return_value = MagicMock(id='job-1')
        with patch.object(recompute, '_get_queue', return_value=queue):
            job = enqueue_recompute('2024-12-10')

        assert job.id == 'job-1'
        queue.enqueue.assert_called_once_with(
            run_recompute_job, '2024-12-10', job_timeout=RECOMPUTE_JOB_TIMEOUT,
        )

    def test_queue_built_lazily_on_redis(self, mock_redis, monkeypatch):
        monkeypatch.setattr(recompute, '_queue', None)
        with patch('rq.Queue') as queue_cls:
            first = recompute._get_queue()
            second = recompute._get_queue()

        assert first is second
        queue_cls.assert_called_once_with(RECOMPUTE_QUEUE, connection=mock_redis)
