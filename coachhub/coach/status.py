# -*- coding: utf-8 -*-
"""Client triage status."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from ..checkins.cadence import DEFAULT_POLICY, CadencePolicy, Timestamp, is_overdue


class ClientStatus(str, Enum):
    pending = "pending"
    active = "active"
    overdue = "overdue"


def classify(
    onboarding_completed: bool,
    last_check_in_at: Optional[Timestamp],
    *,
    now: Optional[datetime] = None,
    policy: CadencePolicy = DEFAULT_POLICY,
) -> ClientStatus:
    if not onboarding_completed:
        return ClientStatus.pending
    if is_overdue(last_check_in_at, True, now=now, policy=policy):
        return ClientStatus.overdue
    return ClientStatus.active
