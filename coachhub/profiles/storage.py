# -*- coding: utf-8 -*-
"""Profiles — DB storage helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _row_to_profile(row: Any) -> Dict[str, Any]:
    data = dict(row)
    data["onboarding_completed"] = bool(data.get("onboarding_completed"))
    return data


def create_profile(*, user_id: str, email: str, full_name: str = "", role: str = "client") -> Dict[str, Any]:
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO profiles (user_id, email, full_name, role, subscription_status, onboarding_completed, created_at, updated_at)
            VALUES (?, ?, ?, ?, 'none', 0, ?, ?)
            """,
            (user_id, email, full_name, role, now, now),
        )
        row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
    return _row_to_profile(row)


def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
    return _row_to_profile(row) if row else None


def list_client_profiles() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM profiles WHERE role = 'client' ORDER BY created_at DESC"
        ).fetchall()
    return [_row_to_profile(r) for r in rows]


def mark_onboarding_completed(user_id: str) -> bool:
    """Set the flag once. Returns True only when this call flipped it."""
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            """
            UPDATE profiles SET onboarding_completed = 1, updated_at = ?
            WHERE user_id = ? AND onboarding_completed = 0
            """,
            (_utc_now(), user_id),
        )
        flipped = cur.rowcount > 0
    if flipped:
        logger.info("Onboarding completed for user %s", user_id)
    return flipped


def update_subscription(
    *,
    status: str,
    user_id: Optional[str] = None,
    stripe_customer_id: Optional[str] = None,
    stripe_subscription_id: Optional[str] = None,
    current_period_end: Optional[str] = None,
) -> int:
    """Write subscription fields, matched by user_id or else by stripe customer id."""
    if not user_id and not stripe_customer_id:
        raise ValueError("user_id or stripe_customer_id is required")

    assignments = ["subscription_status = ?", "updated_at = ?"]
    params: list[Any] = [status, _utc_now()]
    if user_id and stripe_customer_id:
        assignments.append("stripe_customer_id = ?")
        params.append(stripe_customer_id)
    if stripe_subscription_id:
        assignments.append("stripe_subscription_id = ?")
        params.append(stripe_subscription_id)
    if current_period_end:
        assignments.append("current_period_end = ?")
        params.append(current_period_end)

    if user_id:
        where = "user_id = ?"
        params.append(user_id)
    else:
        where = "stripe_customer_id = ?"
        params.append(stripe_customer_id)

    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(f"UPDATE profiles SET {', '.join(assignments)} WHERE {where}", tuple(params))
        return cur.rowcount
