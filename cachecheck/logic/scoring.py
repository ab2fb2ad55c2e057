import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

MAX_SCORE = 100

MAX_AGE_RE = re.compile(r"max-age=(\d+)")
LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# Longer digit runs are clamped instead of converted
MAX_INT_DIGITS = 18
HUGE_INT = 10 ** MAX_INT_DIGITS

# (threshold in seconds, bonus); first match wins
MAX_AGE_TIERS = [
    (86400, 15),  # > 1 day
    (3600, 10),   # > 1 hour
    (60, 5),      # > 1 minute
]


def calculate_caching_score(
    cache_control: str,
    etag: str,
    last_modified: str,
    expires: str,
    cache_status: str,
    age: str,
    now: Optional[datetime] = None,
) -> int:
    """
    Score how cacheable a response is from its caching headers.

    Points are additive and the total is capped at 100:
      cache-control present +10, "public" +5, "max-age=" +10 plus a tier
      bonus by value; etag +10; last-modified +10; expires +5 and +5 more
      when in the future; age +5 and +5 more when > 0; a cache status
      containing "hit" +20.
    """
    score = 0

    if cache_control:
        score += 10
        if "public" in cache_control:
            score += 5
        if "max-age=" in cache_control:
            score += 10
            score += max_age_bonus(cache_control)

    if etag:
        score += 10
    if last_modified:
        score += 10

    if expires:
        score += 5
        if _is_future(expires, now):
            score += 5

    if age:
        score += 5
        age_value = _leading_int(age)
        if age_value is not None and age_value > 0:
            score += 5

    if cache_status and "hit" in cache_status.lower():
        score += 20

    return min(score, MAX_SCORE)


def parse_max_age(cache_control: str) -> Optional[int]:
    match = MAX_AGE_RE.search(cache_control)
    if not match:
        return None
    return _to_int(match.group(1))


def max_age_bonus(cache_control: str) -> int:
    max_age = parse_max_age(cache_control)
    if max_age is None:
        return 0
    for threshold, bonus in MAX_AGE_TIERS:
        if max_age > threshold:
            return bonus
    return 0


def _is_future(value: str, now: Optional[datetime]) -> bool:
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        return False
    if when is None:
        return False
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return when > now


def _leading_int(value: str) -> Optional[int]:
    match = LEADING_INT_RE.match(value)
    if not match:
        return None
    return _to_int(match.group(1))


def _to_int(digits: str) -> int:
    sign = -1 if digits.startswith("-") else 1
    digits = digits.lstrip("+-").lstrip("0") or "0"
    if len(digits) > MAX_INT_DIGITS:
        return sign * HUGE_INT
    return sign * int(digits)
