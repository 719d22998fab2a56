"""
Centralized configuration — all env vars and process-level constants.

Scoring rules (area codes, intake months, tier thresholds) are data, not
settings: they live in leadrank/scoring/scoring_config.yaml.
"""
import os


# ── Redis (RQ queue for background recompute) ────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
RECOMPUTE_QUEUE = os.getenv('RECOMPUTE_QUEUE', 'default')
RECOMPUTE_JOB_TIMEOUT = int(os.getenv('RECOMPUTE_JOB_TIMEOUT', '1800'))

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Scoring rules ─────────────────────────────────────────────────────────────
# Optional override; defaults to the YAML shipped next to the scoring package.
SCORING_CONFIG_PATH = os.getenv('SCORING_CONFIG_PATH')
