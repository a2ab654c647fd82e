"""
Date arithmetic for membership status.

The stored `status` column is a flag written by create, renew and explicit
updates. The helpers here derive expiration from dates for read paths and
never write it back.
"""
from datetime import date, timedelta
from typing import Optional


def is_expired(membership_end: date, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return membership_end < today


def expiring_soon_cutoff(days: int, today: Optional[date] = None) -> date:
    """Last membership_end date that counts as expiring soon."""
    today = today or date.today()
    return today + timedelta(days=days)


def reminder_target_date(days_before: int, today: Optional[date] = None) -> date:
    """Date whose expiring memberships get a reminder today."""
    today = today or date.today()
    return today + timedelta(days=days_before)
