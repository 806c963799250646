# -*- coding: utf-8 -*-
"""Macro targets: system (re)generation from the latest onboarding answers."""

from __future__ import annotations

from typing import Optional

from ..errors import NotFound
from ..records import RecordKind, VersionedRecordStore
from .calculator import generate_macro_targets
from .models import MacroTarget


def regenerate_macro_targets(user_id: str, *, store: Optional[VersionedRecordStore] = None) -> MacroTarget:
    store = store or VersionedRecordStore()
    onboarding = store.latest(user_id, RecordKind.onboarding)
    if onboarding is None:
        raise NotFound("No onboarding data found")
    record = store.append_new_version(user_id, RecordKind.macro_targets, generate_macro_targets(onboarding.payload))
    return MacroTarget.model_validate(record.flat())


def latest_macro_targets(user_id: str, *, store: Optional[VersionedRecordStore] = None) -> Optional[MacroTarget]:
    store = store or VersionedRecordStore()
    record = store.latest(user_id, RecordKind.macro_targets)
    return MacroTarget.model_validate(record.flat()) if record else None
