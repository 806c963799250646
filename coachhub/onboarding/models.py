# -*- coding: utf-8 -*-
"""Onboarding — Pydantic models.

Optional answers fall back to documented defaults so every stored version is complete.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Goal = Literal["bulk", "cut", "recomp"]
ActivityLevel = Literal["sedentary", "lightly_active", "moderate", "very_active", "athlete"]
DietType = Literal[
    "standard",
    "keto",
    "vegan",
    "vegetarian",
    "paleo",
    "gluten_free",
    "dairy_free",
    "halal",
    "kosher",
    "no_restrictions",
]
Level = Literal["low", "medium", "high"]
Split = Literal["full_body", "upper_lower", "ppl", "bro_split", "strength"]


class OnboardingSubmission(BaseModel):
    # Personal
    age: int = Field(..., ge=16, le=100)
    sex: Literal["male", "female"]
    height_cm: float = Field(..., ge=100, le=250)
    weight_kg: float = Field(..., ge=30, le=300)
    goal: Goal
    goal_weight_kg: float = Field(..., ge=30, le=300)
    activity_level: ActivityLevel
    body_fat_percentage: Optional[float] = Field(None, ge=3, le=50)
    body_fat_unsure: bool = False

    # Diet
    diet_type: DietType
    disliked_foods: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    meals_per_day: int = Field(..., ge=1, le=8)
    meal_timing_window: str = ""
    cooking_skill: Level
    budget: Level
    restaurant_frequency: str = ""

    # Injuries
    injuries: List[str] = Field(default_factory=list)
    injury_notes: str = ""

    # Training
    workout_frequency: int = Field(..., ge=2, le=6)
    workout_location: Literal["home", "gym"]
    experience_level: Literal["beginner", "intermediate", "advanced"]
    home_equipment: List[str] = Field(default_factory=list)
    split_preference: Split
    time_per_session: int = Field(..., ge=15, le=180)
    cardio_preference: Literal["none", "light", "moderate", "high"]
    plan_duration_weeks: Literal[4, 8, 12]

    # Lifestyle
    average_steps: int = Field(8000, ge=0, le=50000)
    sleep_hours: float = Field(7, ge=3, le=14)
    stress_level: Level = "medium"
    job_type: Literal["desk", "active"] = "desk"


class OnboardingSubmitResponse(BaseModel):
    success: bool = True
    version: int
    onboarding_completed: bool
