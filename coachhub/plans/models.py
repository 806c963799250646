# -*- coding: utf-8 -*-
"""Plan models for API payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MealPlan(BaseModel):
    id: str
    user_id: str
    version: int
    plan_data: Dict[str, Any] = Field(default_factory=dict)
    grocery_list: Optional[List[Dict[str, Any]]] = None
    created_at: str
    updated_at: Optional[str] = None


class TrainingPlan(BaseModel):
    id: str
    user_id: str
    version: int
    duration_weeks: Optional[int] = None
    plan_data: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    updated_at: Optional[str] = None


class MealPlanEditRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    plan_data: Optional[Dict[str, Any]] = None
    grocery_list: Optional[List[Dict[str, Any]]] = None


class TrainingPlanEditRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    plan_data: Optional[Dict[str, Any]] = None


class MealPlanResponse(BaseModel):
    success: bool = True
    meal_plan: MealPlan


class TrainingPlanResponse(BaseModel):
    success: bool = True
    training_plan: TrainingPlan
