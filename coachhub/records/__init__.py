# -*- coding: utf-8 -*-
"""Versioned records shared by macro targets, meal plans, training plans and onboarding."""

from .models import KIND_POLICIES, EditPolicy, RecordKind, VersionedRecord, edit_policy
from .storage import VersionedRecordStore

__all__ = [
    "KIND_POLICIES",
    "EditPolicy",
    "RecordKind",
    "VersionedRecord",
    "VersionedRecordStore",
    "edit_policy",
]
