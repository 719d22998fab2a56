"""
Field scorers — one pure function per lead attribute.

    name             0-40   token count, length, capitalization, email corroboration
    email            0|30   syntactic validity only, no partial credit
    phone            0|15|20  digit count, high-value area codes score 20
    intake proximity 0-20   months until the parsed intake period

Recency is batch-relative and lives in recency.py. None of these raise on
missing or malformed input: absent data simply scores 0.
"""
import re
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from leadrank.scoring.config import config_value
from leadrank.scoring.intake import parse_intake, months_until

NAME_MAX = 40
EMAIL_SCORE = 30
PHONE_HIGH_VALUE_SCORE = 20
PHONE_VALID_SCORE = 15
INTAKE_MAX = 20

_EMAIL_RE = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')
_LETTERS_RE = re.compile(r'[a-z]+')
_TWO_PART_LOCAL_RE = re.compile(r'[a-z]+[._][a-z]+')
_REPEAT_RE = re.compile(r'(.)\1{2,}')
_DIGIT_RE = re.compile(r'\d')

# (upper bound on months_until, points); first band that fits wins.
_INTAKE_BANDS = [
    (-2, 0),     # passed more than a month ago
    (0, 15),     # this month or just passed
    (2, 20),     # imminent
    (4, 15),
    (6, 10),
    (9, 5),
]


# ── Name ─────────────────────────────────────────────────────────────────────

def _is_title_case(token: str) -> bool:
    return bool(token) and token[0].isupper() and token[1:] == token[1:].lower()


def score_name(name: Optional[str], email: Optional[str] = None) -> int:
    """
    Score how much a submitted name looks like a real full name (0-40).

    +28 for two or more tokens, +12 for one. +6 when the name has at least six
    non-space characters. +4 when two or more tokens are Title-Case (+2 for a
    Title-Case single token). Single-token names get +10 when the email
    local part is that same name in letters, or +6 when the local part looks
    like first.last / first_last. -4 for a character repeated three times in
    a row, -4 for any digit.
    """
    if not name or not name.strip():
        return 0

    trimmed = name.strip()
    tokens = trimmed.split()
    num_tokens = len(tokens)
    score = 0

    if num_tokens >= 2:
        score += 28
    elif num_tokens == 1:
        score += 12

    if len(''.join(tokens)) >= 6:
        score += 6

    title_tokens = sum(1 for t in tokens if _is_title_case(t))
    if num_tokens >= 2 and title_tokens >= 2:
        score += 4
    elif num_tokens == 1 and title_tokens == 1:
        score += 2

    if num_tokens == 1 and email and '@' in email:
        local = email.strip().split('@', 1)[0].lower()
        if local == trimmed.lower() and _LETTERS_RE.fullmatch(local):
            score += 10
        elif _TWO_PART_LOCAL_RE.fullmatch(local):
            score += 6

    if _REPEAT_RE.search(trimmed):
        score -= 4
    if _DIGIT_RE.search(trimmed):
        score -= 4

    return max(0, min(NAME_MAX, score))


# ── Email ────────────────────────────────────────────────────────────────────

def is_valid_email(email: Optional[str]) -> bool:
    if not email or not email.strip():
        return False
    return _EMAIL_RE.fullmatch(email.strip()) is not None


def score_email(email: Optional[str]) -> int:
    """30 for a well-formed local@domain.tld address, else 0."""
    return EMAIL_SCORE if is_valid_email(email) else 0


# ── Phone ────────────────────────────────────────────────────────────────────

def normalize_phone(phone: Optional[str]) -> str:
    """Digits only; '' for None."""
    if not phone:
        return ''
    return re.sub(r'\D', '', phone)


def is_high_value_phone(digits: str, cfg: Optional[Dict[str, Any]] = None) -> bool:
    area_codes = {str(code) for code in config_value(cfg, 'high_value_area_codes')}
    if len(digits) == 11 and digits.startswith('1'):
        return digits[1:4] in area_codes
    if len(digits) == 10:
        return digits[:3] in area_codes
    return False


def score_phone(phone: Optional[str], cfg: Optional[Dict[str, Any]] = None) -> int:
    """20 for a whitelisted regional number, 15 for any 10+ digit number, else 0."""
    digits = normalize_phone(phone)
    if is_high_value_phone(digits, cfg):
        return PHONE_HIGH_VALUE_SCORE
    if len(digits) >= 10:
        return PHONE_VALID_SCORE
    return 0


def detect_country(phone: Optional[str], cfg: Optional[Dict[str, Any]] = None) -> str:
    """
    Best-effort country for a phone number; 'Unknown' when nothing matches.

    NANP numbers resolve by area code (unknown 11-digit NANP numbers default to
    USA); everything else by the longest matching international prefix.
    """
    digits = normalize_phone(phone).lstrip('0')
    if not digits:
        return 'Unknown'

    if digits.startswith('1') and len(digits) >= 4:
        region = config_value(cfg, 'nanp_area_codes').get(digits[1:4])
        if region:
            return region
        if len(digits) == 11:
            return 'USA'

    country_codes = config_value(cfg, 'country_codes')
    for code_len in (3, 2, 1):
        if len(digits) >= code_len:
            country = country_codes.get(digits[:code_len])
            if country:
                return country

    return 'Unknown'


# ── Intake proximity ─────────────────────────────────────────────────────────

def score_intake_proximity(
    intake: Optional[str],
    today: Union[date, datetime, None] = None,
    cfg: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Score how soon the lead's target intake is (0-20).

    Peaks at 20 for an intake one or two months out, tapers to 0 beyond nine
    months; an intake this month or last month still earns 15. Unparseable
    text scores 0.
    """
    parsed = parse_intake(intake, today=today, cfg=cfg)
    if parsed is None:
        return 0

    month, year = parsed
    until = months_until(month, year, today)
    for upper, points in _INTAKE_BANDS:
        if until <= upper:
            return points
    return 0
