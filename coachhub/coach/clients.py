# -*- coding: utf-8 -*-
"""Coach views over clients: the triage list and the per-client plan bundle.

Everything returned here passes through ``serialize.to_snake_case``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..adjustments.storage import count_pending, list_pending
from ..checkins.cadence import next_check_in_due
from ..checkins.storage import count_check_ins, latest_check_in, list_check_ins
from ..errors import NotFound
from ..profiles.models import Profile
from ..profiles.storage import get_profile, list_client_profiles
from ..records import RecordKind, VersionedRecordStore
from ..serialize import to_snake_case
from .status import classify


def _latest_flat(store: VersionedRecordStore, user_id: str, kind: RecordKind) -> Optional[Dict[str, Any]]:
    record = store.latest(user_id, kind)
    return record.flat() if record else None


def client_summary(
    profile: Dict[str, Any],
    *,
    store: Optional[VersionedRecordStore] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    store = store or VersionedRecordStore()
    user_id = profile["user_id"]
    last = latest_check_in(user_id)
    last_at = last["created_at"] if last else None
    summary = dict(profile)
    summary.update(
        {
            "status": classify(bool(profile.get("onboarding_completed")), last_at, now=now).value,
            "last_check_in": last,
            "check_in_count": count_check_ins(user_id),
            "next_check_in_due": next_check_in_due(last_at),
            "macros": _latest_flat(store, user_id, RecordKind.macro_targets),
            "onboarding": _latest_flat(store, user_id, RecordKind.onboarding),
            "pending_adjustment_count": count_pending(user_id),
        }
    )
    return to_snake_case(summary)


def list_client_summaries(*, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    store = VersionedRecordStore()
    return [client_summary(p, store=store, now=now) for p in list_client_profiles()]


def build_client_bundle(
    user_id: str,
    *,
    store: Optional[VersionedRecordStore] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    profile = get_profile(user_id)
    if not profile:
        raise NotFound("Client not found")
    store = store or VersionedRecordStore()
    check_ins = list_check_ins(user_id)
    last_at = max((c["created_at"] for c in check_ins), default=None)
    bundle = {
        "profile": Profile.model_validate(profile),
        "status": classify(profile["onboarding_completed"], last_at, now=now).value,
        "onboarding": _latest_flat(store, user_id, RecordKind.onboarding),
        "macros": _latest_flat(store, user_id, RecordKind.macro_targets),
        "meal_plan": _latest_flat(store, user_id, RecordKind.meal_plan),
        "training_plan": _latest_flat(store, user_id, RecordKind.training_plan),
        "check_ins": check_ins,
        "pending_adjustments": list_pending(user_id),
    }
    return to_snake_case(bundle)


def record_history(user_id: str, kind: RecordKind | str, *, store: Optional[VersionedRecordStore] = None) -> List[Dict[str, Any]]:
    store = store or VersionedRecordStore()
    return to_snake_case([r.flat() for r in store.history(user_id, kind)])
