# -*- coding: utf-8 -*-
"""Plan endpoints (meal/training) for the owning client."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .models import MealPlan, TrainingPlan
from .storage import get_latest_meal_plan, get_latest_training_plan

router = APIRouter(prefix="/api", tags=["Plans"])


@router.get("/meal-plan", response_model=MealPlan, summary="Get my current meal plan")
def my_meal_plan(user: dict = Depends(get_current_user)):
    plan = get_latest_meal_plan(user["id"])
    if not plan:
        raise HTTPException(status_code=404, detail="No meal plan found")
    return plan


@router.get("/training-plan", response_model=TrainingPlan, summary="Get my current training plan")
def my_training_plan(user: dict = Depends(get_current_user)):
    plan = get_latest_training_plan(user["id"])
    if not plan:
        raise HTTPException(status_code=404, detail="No training plan found")
    return plan
