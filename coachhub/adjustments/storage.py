# -*- coding: utf-8 -*-
"""Pending macro adjustments — DB storage helpers.

Proposals are written by the recommendation job and resolved by coach action elsewhere; this
module only records them and answers "what is still pending".
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import PendingAdjustmentCreate

logger = logging.getLogger(__name__)

PENDING = "pending"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def create_pending_adjustment(*, user_id: str, request: PendingAdjustmentCreate) -> Dict[str, Any]:
    adjustment_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO pending_macro_adjustments (
                id, user_id, status, calorie_target, protein_g, carbs_g, fat_g, reason, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                adjustment_id,
                user_id,
                PENDING,
                request.calorie_target,
                request.protein_g,
                request.carbs_g,
                request.fat_g,
                request.reason,
                now,
            ),
        )
    logger.info("Pending macro adjustment %s proposed for user %s", adjustment_id, user_id)
    return {
        "id": adjustment_id,
        "user_id": user_id,
        "status": PENDING,
        "calorie_target": request.calorie_target,
        "protein_g": request.protein_g,
        "carbs_g": request.carbs_g,
        "fat_g": request.fat_g,
        "reason": request.reason,
        "created_at": now,
    }


def list_pending(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        # rowid breaks ties between proposals created within the same timestamp.
        rows = conn.execute(
            """
            SELECT * FROM pending_macro_adjustments
            WHERE user_id = ? AND status = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (user_id, PENDING),
        ).fetchall()
    return [dict(r) for r in rows]


def count_pending(user_id: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM pending_macro_adjustments WHERE user_id = ? AND status = ?",
            (user_id, PENDING),
        ).fetchone()
    return int(row["n"])
