# -*- coding: utf-8 -*-
"""Check-ins — DB storage helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from .models import CheckInCreateRequest
from .photos import photo_url

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _photo_row(row: Any) -> Dict[str, Any]:
    data = dict(row)
    data["url"] = photo_url(data["storage_path"])
    return data


def _attach_photos(conn: Any, check_ins: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not check_ins:
        return check_ins
    ids = [c["id"] for c in check_ins]
    placeholders = ",".join("?" for _ in ids)
    rows = conn.execute(
        f"SELECT * FROM progress_photos WHERE check_in_id IN ({placeholders}) ORDER BY photo_type",
        tuple(ids),
    ).fetchall()
    by_check_in: Dict[str, List[Dict[str, Any]]] = {}
    for r in rows:
        by_check_in.setdefault(r["check_in_id"], []).append(_photo_row(r))
    for c in check_ins:
        c["progress_photos"] = by_check_in.get(c["id"], [])
    return check_ins


def create_check_in(*, user_id: str, request: CheckInCreateRequest) -> Dict[str, Any]:
    check_in_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute("BEGIN IMMEDIATE")
        row = conn.execute(
            "SELECT MAX(week_number) AS last_week FROM check_ins WHERE user_id = ?",
            (user_id,),
        ).fetchone()
        week_number = int(row["last_week"] or 0) + 1
        conn.execute(
            """
            INSERT INTO check_ins (
                id, user_id, week_number, weight_kg, waist_cm, adherence_rating,
                steps_avg, sleep_avg, notes, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                check_in_id,
                user_id,
                week_number,
                float(request.weight_kg),
                request.waist_cm,
                int(request.adherence_rating),
                int(request.steps_avg),
                float(request.sleep_avg),
                request.notes,
                now,
            ),
        )
    logger.info("Check-in week %d stored for user %s", week_number, user_id)
    return {
        "id": check_in_id,
        "user_id": user_id,
        "week_number": week_number,
        "weight_kg": float(request.weight_kg),
        "waist_cm": request.waist_cm,
        "adherence_rating": int(request.adherence_rating),
        "steps_avg": int(request.steps_avg),
        "sleep_avg": float(request.sleep_avg),
        "notes": request.notes,
        "created_at": now,
        "progress_photos": [],
    }


def get_check_in(check_in_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM check_ins WHERE id = ?", (check_in_id,)).fetchone()
        if not row:
            return None
        return _attach_photos(conn, [dict(row)])[0]


def list_check_ins(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM check_ins WHERE user_id = ? ORDER BY week_number DESC",
            (user_id,),
        ).fetchall()
        return _attach_photos(conn, [dict(r) for r in rows])


def latest_check_in(user_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM check_ins WHERE user_id = ? ORDER BY created_at DESC LIMIT 1",
            (user_id,),
        ).fetchone()
    return dict(row) if row else None


def count_check_ins(user_id: str) -> int:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT COUNT(*) AS n FROM check_ins WHERE user_id = ?", (user_id,)).fetchone()
    return int(row["n"])


def recent_check_ins(limit: int = 20) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            """
            SELECT c.*, p.full_name AS profile_name, p.email AS profile_email
            FROM check_ins c
            LEFT JOIN profiles p ON p.user_id = c.user_id
            ORDER BY c.created_at DESC
            LIMIT ?
            """,
            (int(limit),),
        ).fetchall()
    items = []
    for r in rows:
        item = dict(r)
        name = item.pop("profile_name", None)
        email = item.pop("profile_email", None)
        item["client_name"] = name or email or "Unknown"
        items.append(item)
    return items


def save_photo_reference(*, user_id: str, check_in_id: str, photo_type: str, storage_path: str) -> Dict[str, Any]:
    """Record a stored photo; a re-upload of the same type replaces the previous reference."""
    photo_id = str(uuid4())
    now = _utc_now()
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO progress_photos (id, user_id, check_in_id, photo_type, storage_path, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(check_in_id, photo_type) DO UPDATE SET
                storage_path = excluded.storage_path,
                created_at = excluded.created_at
            """,
            (photo_id, user_id, check_in_id, photo_type, storage_path, now),
        )
        row = conn.execute(
            "SELECT * FROM progress_photos WHERE check_in_id = ? AND photo_type = ?",
            (check_in_id, photo_type),
        ).fetchone()
    return _photo_row(row)
