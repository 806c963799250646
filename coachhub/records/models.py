# -*- coding: utf-8 -*-
"""Versioned records — kinds, edit policies and the record model."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RecordKind(str, Enum):
    macro_targets = "macro_targets"
    meal_plan = "meal_plan"
    training_plan = "training_plan"
    onboarding = "onboarding"


class EditPolicy(str, Enum):
    append = "append"
    mutate_latest = "mutate_latest"


# How a coach edit lands for each kind.
KIND_POLICIES: Dict[RecordKind, EditPolicy] = {
    RecordKind.macro_targets: EditPolicy.append,
    RecordKind.meal_plan: EditPolicy.mutate_latest,
    RecordKind.training_plan: EditPolicy.mutate_latest,
    RecordKind.onboarding: EditPolicy.append,
}

KIND_LABELS: Dict[RecordKind, str] = {
    RecordKind.macro_targets: "macro targets",
    RecordKind.meal_plan: "meal plan",
    RecordKind.training_plan: "training plan",
    RecordKind.onboarding: "onboarding response",
}


def edit_policy(kind: RecordKind) -> EditPolicy:
    return KIND_POLICIES[RecordKind(kind)]


class VersionedRecord(BaseModel):
    id: str
    user_id: str
    kind: RecordKind
    version: int = Field(..., ge=1)
    payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: Optional[str] = None

    def flat(self) -> Dict[str, Any]:
        """Payload fields merged with the record envelope (response shape)."""
        data: Dict[str, Any] = dict(self.payload)
        data.update(
            {
                "id": self.id,
                "user_id": self.user_id,
                "version": self.version,
                "created_at": self.created_at,
                "updated_at": self.updated_at,
            }
        )
        return data
