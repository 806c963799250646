# -*- coding: utf-8 -*-
"""Coach notes — private per-client notes written by coaches, read newest first."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import NotFound, ValidationError
from ..profiles.storage import get_profile
from .models import NOTE_CATEGORIES, CoachNoteCreate

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def add_coach_note(*, coach_id: str, request: CoachNoteCreate) -> Dict[str, Any]:
    problems = {
        name: "required"
        for name in ("user_id", "category", "content")
        if not (getattr(request, name) or "").strip()
    }
    if problems:
        raise ValidationError("user_id, category, and content are required", problems)
    if request.category not in NOTE_CATEGORIES:
        raise ValidationError(
            f"category must be one of: {', '.join(NOTE_CATEGORIES)}", {"category": "invalid"}
        )
    if not get_profile(request.user_id):
        raise NotFound("Client not found")

    note = {
        "id": str(uuid4()),
        "user_id": request.user_id,
        "coach_id": coach_id,
        "category": request.category,
        "content": request.content,
        "created_at": _utc_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO coach_notes (id, user_id, coach_id, category, content, created_at)
            VALUES (:id, :user_id, :coach_id, :category, :content, :created_at)
            """,
            note,
        )
    logger.info("Coach %s added a %s note for user %s", coach_id, request.category, request.user_id)
    return note


def list_coach_notes(user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM coach_notes WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]
