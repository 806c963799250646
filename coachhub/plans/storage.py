# -*- coding: utf-8 -*-
"""Plan storage helpers on top of the versioned record store.

Generated plans (written by the plan generation job) always land as a new version; coach
corrections go through ``coach.overrides.apply_coach_edit`` instead.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..records import RecordKind, VersionedRecordStore
from .models import MealPlan, TrainingPlan


def save_generated_meal_plan(
    user_id: str,
    plan_data: Dict[str, Any],
    grocery_list: Optional[List[Dict[str, Any]]] = None,
    *,
    store: Optional[VersionedRecordStore] = None,
) -> MealPlan:
    store = store or VersionedRecordStore()
    payload: Dict[str, Any] = {"plan_data": plan_data, "grocery_list": grocery_list or []}
    record = store.append_new_version(user_id, RecordKind.meal_plan, payload)
    return MealPlan.model_validate(record.flat())


def save_generated_training_plan(
    user_id: str,
    plan_data: Dict[str, Any],
    duration_weeks: int,
    *,
    store: Optional[VersionedRecordStore] = None,
) -> TrainingPlan:
    store = store or VersionedRecordStore()
    payload = {"plan_data": plan_data, "duration_weeks": int(duration_weeks)}
    record = store.append_new_version(user_id, RecordKind.training_plan, payload)
    return TrainingPlan.model_validate(record.flat())


def get_latest_meal_plan(user_id: str, *, store: Optional[VersionedRecordStore] = None) -> Optional[MealPlan]:
    store = store or VersionedRecordStore()
    record = store.latest(user_id, RecordKind.meal_plan)
    return MealPlan.model_validate(record.flat()) if record else None


def get_latest_training_plan(user_id: str, *, store: Optional[VersionedRecordStore] = None) -> Optional[TrainingPlan]:
    store = store or VersionedRecordStore()
    record = store.latest(user_id, RecordKind.training_plan)
    return TrainingPlan.model_validate(record.flat()) if record else None
