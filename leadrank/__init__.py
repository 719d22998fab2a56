"""
leadrank — lead quality scoring and recruiter call-queue ordering.

Scores raw outreach records into a composite quality score + tier, recomputes
those scores for a whole dataset in one batch pass, and orders the records
that are still eligible for outreach into a recruiter work queue.
"""
from leadrank.records import LeadRecord
from leadrank.scoring.composite import LeadScore, score_lead, tier_for_score
from leadrank.jobs.recompute import RecomputeSummary, recompute_scores
from leadrank.callqueue.ordering import prioritize_leads

__all__ = [
    'LeadRecord',
    'LeadScore',
    'RecomputeSummary',
    'prioritize_leads',
    'recompute_scores',
    'score_lead',
    'tier_for_score',
]
