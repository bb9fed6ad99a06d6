import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional


def generate_verification_code() -> str:
    """Six-digit numeric code in 100000..999999."""
    return str(100000 + secrets.randbelow(900000))


def code_expiry(ttl_minutes: int, now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(minutes=ttl_minutes)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def code_matches(
    stored_code: Optional[str],
    expires_at: Optional[datetime],
    submitted: str,
    now: datetime | None = None,
) -> bool:
    """True only for an exact match with an unexpired stored code."""
    # compare_digest only accepts ASCII str; bytes take any submitted text
    if not stored_code or not secrets.compare_digest(stored_code.encode(), submitted.encode()):
        return False
    if expires_at is None:
        return True
    now = now or datetime.now(timezone.utc)
    return _as_utc(expires_at) > now
