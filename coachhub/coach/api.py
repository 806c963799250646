# -*- coding: utf-8 -*-
"""Coach endpoints (coach or admin only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import require_coach
from ..checkins.models import ActivityItem, ActivityResponse
from ..checkins.storage import recent_check_ins
from ..errors import ValidationError
from ..macros.models import MacroOverrideRequest, MacroTargetResponse
from ..plans.models import MealPlanEditRequest, MealPlanResponse, TrainingPlanEditRequest, TrainingPlanResponse
from ..records import RecordKind
from .clients import build_client_bundle, list_client_summaries, record_history
from .models import CoachNote, CoachNoteCreate, CoachNoteList, CoachNoteResponse
from .notes import add_coach_note, list_coach_notes
from .overrides import apply_coach_override, edit_meal_plan, edit_training_plan

router = APIRouter(prefix="/api/coach", tags=["Coach"], dependencies=[Depends(require_coach)])


@router.get("/clients", summary="All clients with triage status")
def list_clients():
    return {"clients": list_client_summaries()}


@router.get("/clients/{user_id}", summary="Client plan bundle")
def client_detail(user_id: str):
    return build_client_bundle(user_id)


@router.get("/clients/{user_id}/history/{kind}", summary="Version history of one record kind")
def client_history(user_id: str, kind: RecordKind):
    return {"kind": kind.value, "versions": record_history(user_id, kind)}


@router.get("/activity", response_model=ActivityResponse, summary="Most recent check-ins")
def activity(limit: int = Query(default=20, ge=1, le=100)):
    return ActivityResponse(activity=[ActivityItem.model_validate(r) for r in recent_check_ins(limit)])


@router.put("/macros", response_model=MacroTargetResponse, summary="Override a client's macro targets")
def override_macros(request: MacroOverrideRequest):
    macro_target = apply_coach_override(
        request.user_id,
        calorie_target=request.calorie_target,
        protein_g=request.protein_g,
        carbs_g=request.carbs_g,
        fat_g=request.fat_g,
        explanation=request.explanation,
    )
    return MacroTargetResponse(macro_target=macro_target)


@router.put("/meal-plan", response_model=MealPlanResponse, summary="Edit a client's current meal plan")
def update_meal_plan(request: MealPlanEditRequest):
    extra = {"grocery_list": request.grocery_list} if "grocery_list" in request.model_fields_set else {}
    plan = edit_meal_plan(request.user_id, request.plan_data, **extra)
    return MealPlanResponse(meal_plan=plan)


@router.put("/training-plan", response_model=TrainingPlanResponse, summary="Edit a client's current training plan")
def update_training_plan(request: TrainingPlanEditRequest):
    plan = edit_training_plan(request.user_id, request.plan_data)
    return TrainingPlanResponse(training_plan=plan)


@router.get("/notes", response_model=CoachNoteList, summary="Notes on one client, newest first")
def client_notes(user_id: Optional[str] = Query(default=None)):
    if not user_id:
        raise ValidationError("user_id is required", {"user_id": "required"})
    return CoachNoteList(notes=[CoachNote.model_validate(n) for n in list_coach_notes(user_id)])


@router.post("/notes", response_model=CoachNoteResponse, summary="Add a note on a client")
def create_note(request: CoachNoteCreate, coach: dict = Depends(require_coach)):
    note = add_coach_note(coach_id=coach["id"], request=request)
    return CoachNoteResponse(note=CoachNote.model_validate(note))
