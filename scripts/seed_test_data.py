#!/usr/bin/env python3
"""
Seed test leads for verifying scoring and the call queue locally.

Creates leads covering the key scenarios:
  1. Complete, well-formed leads with an imminent intake (High)
  2. Single-name leads corroborated by their email
  3. Junk submissions (digits, repeated characters, bad email)
  4. VIP-flagged leads and already-contacted leads
  5. Closed leads (converted, wrong number, ...) that must not reach the queue

Usage:
    python scripts/seed_test_data.py          # seed all scenarios
    python scripts/seed_test_data.py --clear  # wipe seeded data first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leadrank.database import get_session, engine, Base
from leadrank.models.lead import Lead


# ── Fake leads ───────────────────────────────────────────────────────────────
# days_ago drives created_time, so the recency spread is realistic.

LEADS = [
    {'name': 'Maria Lopez',       'email': 'maria.lopez@example.com',   'phone': '+1 (809) 555-1234', 'intake': 'February 2025',  'status': 'not_contacted', 'vip': False, 'days_ago': 2},
    {'name': 'Carlos Reyes',      'email': 'carlos.reyes@example.com',  'phone': '829-555-0199',      'intake': 'Feb intake',     'status': 'not_contacted', 'vip': True,  'days_ago': 10},
    {'name': 'Ana Martinez',      'email': 'ana.m@example.com',         'phone': '+34 612 345 678',   'intake': '2025-05',        'status': 'contacted',     'vip': False, 'days_ago': 25},
    {'name': 'Sofia',             'email': 'sofia@example.com',         'phone': '8495550147',        'intake': 'May',            'status': 'not_contacted', 'vip': False, 'days_ago': 40},
    {'name': 'Luis',              'email': 'luis.perez@example.com',    'phone': '+52 55 1234 5678',  'intake': '10/2025',        'status': 'interested',    'vip': False, 'days_ago': 55},
    {'name': 'jjjohn123',         'email': 'not-an-email',              'phone': '555-01',            'intake': 'asap',           'status': 'not_contacted', 'vip': False, 'days_ago': 70},
    {'name': '',                  'email': None,                        'phone': None,                'intake': None,             'status': 'not_contacted', 'vip': False, 'days_ago': None},
    {'name': 'Pedro Gomez',       'email': 'pedro.gomez@example.com',   'phone': '+1 787 555 0101',   'intake': 'October 2025',   'status': 'converted',     'vip': True,  'days_ago': 90},
    {'name': 'Lucia Fernandez',   'email': 'lucia.f@example.com',       'phone': '+1 212 555 0188',   'intake': 'Feb 2025',       'status': 'wrong_number',  'vip': False, 'days_ago': 15},
    {'name': 'Diego Torres',      'email': 'diego.torres@example.com',  'phone': '+57 300 123 4567',  'intake': 'next year 2026', 'status': 'not_contacted', 'vip': False, 'days_ago': 5},
    {'name': 'Valentina Cruz',    'email': 'vcruz@example.com',         'phone': '+1 809 555 0123',   'intake': 'October',        'status': 'follow_up',     'vip': True,  'days_ago': 30},
    {'name': 'Andres Rojas',      'email': 'andres.rojas@example.com',  'phone': '+54 11 5555 1234',  'intake': 'Spring',         'status': 'archived',      'vip': False, 'days_ago': 120},
]

# Tag for seeded rows so --clear only removes what this script created
SEED_SOURCE = 'seed'


def seed_leads(session):
    """Insert one Lead per fake lead."""
    now = datetime.now(timezone.utc)
    for entry in LEADS:
        created_time = now - timedelta(days=entry['days_ago']) if entry['days_ago'] is not None else None
        session.add(Lead(
            prospect_name=entry['name'],
            prospect_email=entry['email'],
            phone=entry['phone'],
            intake=entry['intake'],
            source=SEED_SOURCE,
            contact_status=entry['status'],
            is_priority=entry['vip'],
            created_time=created_time,
        ))
    print(f'  Seeded {len(LEADS)} leads')


def clear_seeded_data(session):
    """Delete all leads created by this script."""
    deleted = session.query(Lead).filter(
        Lead.source == SEED_SOURCE,
    ).delete(synchronize_session=False)
    session.commit()
    print(f'Cleared {deleted} seeded leads from DB.')


def main():
    parser = argparse.ArgumentParser(description='Seed test leads for scoring verification')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before (or instead of) seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    # Ensure tables exist (for SQLite local dev)
    Base.metadata.create_all(engine)

    session = get_session()
    try:
        if args.clear or args.clear_only:
            clear_seeded_data(session)
            if args.clear_only:
                return

        print('Seeding test data...')
        seed_leads(session)
        session.commit()
        print('\nDone! Run scripts/recompute_scores.py, then scripts/call_queue.py to verify.')

    except Exception as e:
        session.rollback()
        print(f'Error: {e}')
        raise
    finally:
        session.close()


if __name__ == '__main__':
    main()
