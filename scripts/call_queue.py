#!/usr/bin/env python3
"""
Print the recruiter call queue: VIP first, then earliest intake, then
never-contacted leads. Closed leads (converted, disqualified, ...) are left out.

Usage:
    python scripts/call_queue.py                  # full queue
    python scripts/call_queue.py --limit 25       # next 25 calls
    python scripts/call_queue.py --today 2024-12-01
    python scripts/call_queue.py --country "Dominican Republic"
    python scripts/call_queue.py --list-countries

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import argparse
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leadrank.logging_config import configure_logging
from leadrank.callqueue.ordering import prioritize_leads, queue_countries
from leadrank.services.db import fetch_outreach_candidates


def main(argv=None):
    parser = argparse.ArgumentParser(description='Show the ordered recruiter call queue')
    parser.add_argument('--limit', type=int, default=None, help='Only show the first N leads')
    parser.add_argument('--today', type=date.fromisoformat, default=None, help='Reference date (YYYY-MM-DD)')
    parser.add_argument('--country', default=None, help='Only show leads from this country (e.g. "Dominican Republic")')
    parser.add_argument('--list-countries', action='store_true', help='Print the countries present in the queue and exit')
    args = parser.parse_args(argv)

    configure_logging()

    candidates = fetch_outreach_candidates()
    if args.list_countries:
        for country in queue_countries(prioritize_leads(candidates, today=args.today)):
            print(country)
        return 0

    queue = prioritize_leads(candidates, today=args.today, country=args.country)
    if args.limit is not None:
        queue = queue[:args.limit]

    for position, lead in enumerate(queue, 1):
        star = '*' if lead.is_priority_flagged else ' '
        print(
            f"{position:>4}. {star} #{lead.id:<6} {lead.display_name or '(no name)':<28} "
            f"country={lead.country or '-':<20} intake={lead.intake_period or '-':<16} "
            f"status={lead.outreach_status or '-':<14} quality={lead.quality_tier or '-'}"
        )
    print(f'\n{len(queue)} leads in queue')
    return 0


if __name__ == '__main__':
    sys.exit(main())
