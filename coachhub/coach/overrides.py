# -*- coding: utf-8 -*-
"""Coach overrides and edits.

Whether a coach change appends a version or rewrites the latest one is decided by the kind's
``EditPolicy`` (see ``records.models.KIND_POLICIES``), never by the caller. Callers must hold one
of ``auth.security.COACH_ROLES``; the HTTP layer enforces it with ``require_coach``.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Dict, Mapping, Optional

from ..errors import ValidationError
from ..macros.models import COACH_OVERRIDE, DEFAULT_OVERRIDE_EXPLANATION, MacroTarget
from ..plans.models import MealPlan, TrainingPlan
from ..records import EditPolicy, RecordKind, VersionedRecord, VersionedRecordStore, edit_policy

logger = logging.getLogger(__name__)

REQUIRED_OVERRIDE_FIELDS = ("calorie_target", "protein_g", "carbs_g", "fat_g")

# Overrides change targets only; the energy-expenditure baseline is inherited.
BASELINE_CARRY_FORWARD = {"bmr": 0, "tdee": 0}

EDITABLE_PLAN_FIELDS = {
    RecordKind.meal_plan: frozenset({"plan_data", "grocery_list"}),
    RecordKind.training_plan: frozenset({"plan_data"}),
}

# Marks an optional edit field the caller did not send.
UNCHANGED = object()


def commit_coach_change(
    store: VersionedRecordStore,
    user_id: str,
    kind: RecordKind,
    fields: Mapping[str, Any],
    *,
    carry_forward: Optional[Mapping[str, Any]] = None,
) -> VersionedRecord:
    if edit_policy(kind) is EditPolicy.append:
        return store.append_new_version(user_id, kind, fields, carry_forward=carry_forward)
    return store.update_latest_in_place(user_id, kind, fields)


def _validated_macros(values: Mapping[str, Any]) -> Dict[str, float]:
    problems: Dict[str, str] = {}
    clean: Dict[str, float] = {}
    for name in REQUIRED_OVERRIDE_FIELDS:
        value = values.get(name)
        if value is None:
            problems[name] = "required"
        elif isinstance(value, bool) or not isinstance(value, Real):
            problems[name] = "must be a number"
        elif not math.isfinite(value) or value <= 0:
            problems[name] = "must be positive"
        else:
            clean[name] = value
    if problems:
        raise ValidationError("calorie_target, protein_g, carbs_g, and fat_g are required and must be positive", problems)
    return clean


def apply_coach_override(
    user_id: str,
    *,
    calorie_target: Optional[float] = None,
    protein_g: Optional[float] = None,
    carbs_g: Optional[float] = None,
    fat_g: Optional[float] = None,
    explanation: Optional[str] = None,
    store: Optional[VersionedRecordStore] = None,
) -> MacroTarget:
    """Store coach-chosen macro targets as a new version, keeping the latest BMR/TDEE."""
    macros = _validated_macros(
        {"calorie_target": calorie_target, "protein_g": protein_g, "carbs_g": carbs_g, "fat_g": fat_g}
    )
    payload: Dict[str, Any] = dict(macros)
    payload["formula_used"] = COACH_OVERRIDE
    payload["explanation"] = explanation or DEFAULT_OVERRIDE_EXPLANATION

    store = store or VersionedRecordStore()
    record = commit_coach_change(
        store, user_id, RecordKind.macro_targets, payload, carry_forward=BASELINE_CARRY_FORWARD
    )
    logger.info("Coach macro override stored as v%d for user %s", record.version, user_id)
    return MacroTarget.model_validate(record.flat())


def apply_coach_edit(
    user_id: str,
    kind: RecordKind | str,
    fields: Mapping[str, Any],
    *,
    store: Optional[VersionedRecordStore] = None,
) -> VersionedRecord:
    """Merge the supplied plan fields into the client's latest plan of ``kind``."""
    kind = RecordKind(kind)
    allowed = EDITABLE_PLAN_FIELDS.get(kind)
    if allowed is None:
        raise ValidationError(f"{kind.value} is not a coach-editable plan", {"kind": "not editable"})

    unknown = sorted(k for k in fields if k not in allowed)
    if unknown:
        raise ValidationError("Unsupported plan fields", {k: "not editable" for k in unknown})
    plan_data = fields.get("plan_data")
    if plan_data is None or not isinstance(plan_data, dict):
        raise ValidationError("user_id and plan_data are required", {"plan_data": "required"})

    store = store or VersionedRecordStore()
    record = commit_coach_change(store, user_id, kind, dict(fields))
    logger.info("Coach edited %s v%d for user %s", kind.value, record.version, user_id)
    return record


def edit_meal_plan(
    user_id: str,
    plan_data: Dict[str, Any],
    grocery_list: Any = UNCHANGED,
    *,
    store: Optional[VersionedRecordStore] = None,
) -> MealPlan:
    """Edit the latest meal plan. An explicit ``grocery_list=None`` clears the list."""
    fields: Dict[str, Any] = {"plan_data": plan_data}
    if grocery_list is not UNCHANGED:
        fields["grocery_list"] = grocery_list
    record = apply_coach_edit(user_id, RecordKind.meal_plan, fields, store=store)
    return MealPlan.model_validate(record.flat())


def edit_training_plan(
    user_id: str,
    plan_data: Dict[str, Any],
    *,
    store: Optional[VersionedRecordStore] = None,
) -> TrainingPlan:
    record = apply_coach_edit(user_id, RecordKind.training_plan, {"plan_data": plan_data}, store=store)
    return TrainingPlan.model_validate(record.flat())
