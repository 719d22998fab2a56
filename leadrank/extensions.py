"""
Shared client instances — Redis for the background job queue.

redis.from_url() does not connect until the first command, so importing this
module is always safe (even when Redis is not running during tests).
"""
import redis

from leadrank.config import REDIS_URL

# ── Redis ─────────────────────────────────────────────────────────────────────
# RQ pickles job payloads, so responses must stay as bytes (no decode_responses).
redis_client = redis.from_url(REDIS_URL)
