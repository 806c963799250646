# -*- coding: utf-8 -*-
"""Onboarding service. Every submission is a new version; the first one activates the client."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..profiles.storage import mark_onboarding_completed
from ..records import RecordKind, VersionedRecord, VersionedRecordStore
from .models import OnboardingSubmission


def submit_onboarding(
    user_id: str,
    submission: OnboardingSubmission,
    *,
    store: Optional[VersionedRecordStore] = None,
) -> VersionedRecord:
    store = store or VersionedRecordStore()
    record = store.append_new_version(user_id, RecordKind.onboarding, submission.model_dump(mode="json"))
    # Never reset by later versions; only the first flip has any effect.
    mark_onboarding_completed(user_id)
    return record


def latest_onboarding(user_id: str, *, store: Optional[VersionedRecordStore] = None) -> Optional[Dict[str, Any]]:
    store = store or VersionedRecordStore()
    record = store.latest(user_id, RecordKind.onboarding)
    return record.flat() if record else None
