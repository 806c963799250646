# -*- coding: utf-8 -*-
"""Check-in cadence: decides whether an active client is overdue.

A client is expected to check in once per ``CHECK_IN_CADENCE``; ``CHECK_IN_GRACE`` is the slack
allowed on top before they count as overdue. Both come from configuration and can be replaced
per call with a ``CadencePolicy``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from ..config import settings

Timestamp = Union[datetime, str]

CHECK_IN_CADENCE = timedelta(days=settings.checkin_cadence_days)
CHECK_IN_GRACE = timedelta(hours=settings.checkin_grace_hours)


@dataclass(frozen=True)
class CadencePolicy:
    cadence: timedelta = CHECK_IN_CADENCE
    grace: timedelta = CHECK_IN_GRACE

    @property
    def threshold(self) -> timedelta:
        return self.cadence + self.grace


DEFAULT_POLICY = CadencePolicy()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Optional[Timestamp]) -> Optional[datetime]:
    """ISO8601 string or datetime -> aware UTC datetime. Naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_overdue(
    last_check_in_at: Optional[Timestamp],
    is_active_client: bool,
    *,
    now: Optional[datetime] = None,
    policy: CadencePolicy = DEFAULT_POLICY,
) -> bool:
    # Cadence tracking only starts once onboarding is done.
    if not is_active_client:
        return False
    last = parse_timestamp(last_check_in_at)
    if last is None:
        return True
    current = parse_timestamp(now) or _utc_now()
    return current - last > policy.threshold


def next_check_in_due(
    last_check_in_at: Optional[Timestamp],
    *,
    policy: CadencePolicy = DEFAULT_POLICY,
) -> Optional[datetime]:
    last = parse_timestamp(last_check_in_at)
    if last is None:
        return None
    return last + policy.cadence
