# -*- coding: utf-8 -*-
"""Versioned record storage (SQLite).

Every kind lives in ``versioned_records`` keyed by ``(user_id, kind, version)``. "Latest" is
always the highest version, never the newest timestamp. Allocation runs inside a
``BEGIN IMMEDIATE`` transaction and the unique index rejects any duplicate that slips through;
collisions are retried a bounded number of times before surfacing ``Conflict``.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import Conflict, NotFound, ValidationError
from .models import KIND_LABELS, RecordKind, VersionedRecord

logger = logging.getLogger(__name__)

_ENVELOPE_KEYS = {"id", "user_id", "kind", "version", "created_at", "updated_at"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def _row_to_record(row: Mapping[str, Any]) -> VersionedRecord:
    raw = row["payload_json"]
    payload = json.loads(raw) if raw else {}
    return VersionedRecord(
        id=row["id"],
        user_id=row["user_id"],
        kind=RecordKind(row["kind"]),
        version=int(row["version"]),
        payload=payload,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _check_payload_keys(payload: Mapping[str, Any]) -> None:
    clash = sorted(k for k in payload if k in _ENVELOPE_KEYS)
    if clash:
        raise ValidationError(
            "Payload may not set record envelope fields",
            {k: "reserved" for k in clash},
        )


class VersionedRecordStore:
    """Append-only versions per (user_id, kind); only the latest may be edited in place."""

    def __init__(self, db_path: Path | None = None, *, retry_limit: int | None = None) -> None:
        self.db_path = db_path or settings.app_db_path
        limit = settings.version_retry_limit if retry_limit is None else retry_limit
        self.retry_limit = max(1, int(limit))

    def latest(self, user_id: str, kind: RecordKind | str) -> Optional[VersionedRecord]:
        with db_conn(self.db_path) as conn:
            row = self._latest_row(conn, user_id, RecordKind(kind))
        return _row_to_record(row) if row else None

    def history(self, user_id: str, kind: RecordKind | str) -> List[VersionedRecord]:
        with db_conn(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT * FROM versioned_records
                WHERE user_id = ? AND kind = ?
                ORDER BY version DESC
                """,
                (user_id, RecordKind(kind).value),
            ).fetchall()
        return [_row_to_record(r) for r in rows]

    def append_new_version(
        self,
        user_id: str,
        kind: RecordKind | str,
        payload: Mapping[str, Any],
        *,
        carry_forward: Mapping[str, Any] | None = None,
    ) -> VersionedRecord:
        """Insert ``payload`` as version latest+1.

        ``carry_forward`` maps field -> fallback: each field is copied from the previous latest
        version (read in the same transaction), or set to the fallback when there is none.
        """
        kind = RecordKind(kind)
        _check_payload_keys(payload)
        attempt = 0
        while True:
            attempt += 1
            try:
                with db_conn(self.db_path) as conn:
                    conn.execute("BEGIN IMMEDIATE")
                    record = self._insert_next_version(conn, user_id, kind, payload, carry_forward or {})
            except sqlite3.IntegrityError as exc:
                if attempt >= self.retry_limit:
                    logger.error(
                        "Version allocation for %s/%s failed after %d attempts", user_id, kind.value, attempt
                    )
                    raise Conflict(
                        f"Could not allocate a new {KIND_LABELS[kind]} version, please retry"
                    ) from exc
                logger.warning("Version collision for %s/%s (attempt %d), retrying", user_id, kind.value, attempt)
                continue
            logger.info("Stored %s v%d for user %s", kind.value, record.version, user_id)
            return record

    def update_latest_in_place(
        self,
        user_id: str,
        kind: RecordKind | str,
        fields: Mapping[str, Any],
    ) -> VersionedRecord:
        kind = RecordKind(kind)
        _check_payload_keys(fields)
        now = _utc_now()
        with db_conn(self.db_path) as conn:
            conn.execute("BEGIN IMMEDIATE")
            row = self._latest_row(conn, user_id, kind)
            if not row:
                raise NotFound(f"No {KIND_LABELS[kind]} found for this client")
            current = _row_to_record(row)
            payload = dict(current.payload)
            payload.update(fields)
            conn.execute(
                "UPDATE versioned_records SET payload_json = ?, updated_at = ? WHERE id = ?",
                (json.dumps(payload, ensure_ascii=False), now, current.id),
            )
        logger.info("Edited %s v%d in place for user %s", kind.value, current.version, user_id)
        return current.model_copy(update={"payload": payload, "updated_at": now})

    def _latest_row(self, conn: sqlite3.Connection, user_id: str, kind: RecordKind) -> Optional[sqlite3.Row]:
        return conn.execute(
            """
            SELECT * FROM versioned_records
            WHERE user_id = ? AND kind = ?
            ORDER BY version DESC
            LIMIT 1
            """,
            (user_id, kind.value),
        ).fetchone()

    def _insert_next_version(
        self,
        conn: sqlite3.Connection,
        user_id: str,
        kind: RecordKind,
        payload: Mapping[str, Any],
        carry_forward: Mapping[str, Any],
    ) -> VersionedRecord:
        previous_row = self._latest_row(conn, user_id, kind)
        previous = _row_to_record(previous_row) if previous_row else None
        version = (previous.version if previous else 0) + 1
        record_id = str(uuid4())
        now = _utc_now()
        data: Dict[str, Any] = dict(payload)
        for field, fallback in carry_forward.items():
            value = previous.payload.get(field) if previous else None
            data[field] = fallback if value is None else value
        conn.execute(
            """
            INSERT INTO versioned_records (id, user_id, kind, version, payload_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (record_id, user_id, kind.value, version, json.dumps(data, ensure_ascii=False), now, now),
        )
        return VersionedRecord(
            id=record_id,
            user_id=user_id,
            kind=kind,
            version=version,
            payload=data,
            created_at=now,
            updated_at=now,
        )
