# -*- coding: utf-8 -*-
"""Macro targets — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

FormulaUsed = Literal["katch_mcardle", "mifflin_st_jeor", "coach_override"]

COACH_OVERRIDE = "coach_override"
DEFAULT_OVERRIDE_EXPLANATION = "Coach manual override"


class MacroTarget(BaseModel):
    id: str
    user_id: str
    version: int
    bmr: int = 0
    tdee: int = 0
    calorie_target: float
    protein_g: float
    carbs_g: float
    fat_g: float
    formula_used: FormulaUsed
    explanation: str = ""
    created_at: str
    updated_at: Optional[str] = None


class MacroOverrideRequest(BaseModel):
    # Unconstrained: apply_coach_override reports every offending field at once.
    user_id: str = Field(..., min_length=1)
    calorie_target: Optional[float] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    explanation: Optional[str] = Field(None, max_length=4000)


class MacroTargetResponse(BaseModel):
    success: bool = True
    macro_target: MacroTarget
