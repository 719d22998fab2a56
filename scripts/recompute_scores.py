#!/usr/bin/env python3
"""
Recalculate lead scores for every active lead.

Runs the recompute pass inline (default) or enqueues it on the RQ worker.

Usage:
    python scripts/recompute_scores.py                     # recompute + write back
    python scripts/recompute_scores.py --dry-run           # report only, no writes
    python scripts/recompute_scores.py --today 2024-12-01  # pin the reference date
    python scripts/recompute_scores.py --enqueue           # hand off to the RQ worker

Requires: DATABASE_URL set (or defaults to sqlite:///local.db); Redis for --enqueue.
"""
import sys
import os
import argparse
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leadrank.logging_config import configure_logging
from leadrank.jobs.recompute import run_recompute_job, enqueue_recompute


def _iso_date(value):
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Recalculate lead scores and quality tiers')
    parser.add_argument('--dry-run', action='store_true', help='Score every lead but write nothing')
    parser.add_argument('--today', type=_iso_date, default=None, help='Reference date for intake proximity (YYYY-MM-DD)')
    parser.add_argument('--enqueue', action='store_true', help='Run on the background worker instead of inline')
    args = parser.parse_args(argv)

    configure_logging()

    if args.enqueue:
        if args.dry_run:
            parser.error('--dry-run cannot be combined with --enqueue')
        job = enqueue_recompute(args.today)
        print(f'Enqueued recompute job {job.id}')
        return 0

    summary = run_recompute_job(today=args.today, dry_run=args.dry_run)

    print('\n=== Recalculation Complete ===')
    if args.dry_run:
        print('(dry run, nothing written)')
    print(f"Total leads: {summary['processed'] + summary['failed']}")
    print(f"Processed: {summary['processed']}")
    print(f"Failed:    {summary['failed']}")
    print('\nQuality Distribution:')
    for tier, count in summary['tier_counts'].items():
        print(f'  {tier}: {count}')
    return 1 if summary['failed'] else 0


if __name__ == '__main__':
    sys.exit(main())
