# -*- coding: utf-8 -*-
"""System macro targets from onboarding answers.

BMR uses Katch-McArdle when a body fat percentage is known, otherwise Mifflin-St Jeor. TDEE
applies an activity multiplier, the calorie target applies a goal-dependent deficit/surplus,
and macros split the target into protein (per lb bodyweight), fat (with a floor) and carbs
(the remainder, minimum 50 g).
"""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional, Tuple

ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderate": 1.55,
    "very_active": 1.725,
    "athlete": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

KG_TO_LB = 2.205
MIN_CARBS_G = 50


def _round(value: float) -> int:
    """Round half up, so x.5 always goes to x+1."""
    return math.floor(value + 0.5)


def calculate_bmr(onboarding: Mapping[str, Any]) -> Tuple[int, str]:
    body_fat = onboarding.get("body_fat_percentage")
    weight = float(onboarding["weight_kg"])
    if not onboarding.get("body_fat_unsure") and body_fat:
        lean_mass = weight * (1 - float(body_fat) / 100)
        return _round(370 + 21.6 * lean_mass), "katch_mcardle"

    base = 10 * weight + 6.25 * float(onboarding["height_cm"]) - 5 * float(onboarding["age"])
    bmr = base + 5 if onboarding.get("sex") == "male" else base - 161
    return _round(bmr), "mifflin_st_jeor"


def calculate_tdee(bmr: int, activity_level: str) -> int:
    return _round(bmr * ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER))


def calculate_calorie_target(
    tdee: int,
    goal: str,
    body_fat_percentage: Optional[float],
    experience_level: str,
) -> Tuple[int, str]:
    if goal == "cut":
        deficit = 0.20
        if body_fat_percentage:
            if body_fat_percentage > 25:
                deficit = 0.25
            elif body_fat_percentage <= 18:
                deficit = 0.15
        calories = _round(tdee * (1 - deficit))
        if body_fat_percentage and body_fat_percentage > 25:
            note = "Since you have more body fat to work with, you can sustain a slightly larger deficit safely."
        elif body_fat_percentage and body_fat_percentage < 18:
            note = "Since you're already fairly lean, we're using a conservative deficit to preserve muscle mass."
        else:
            note = "This moderate deficit balances fat loss with muscle preservation."
        return calories, (
            f"Your calorie target is set at a {_round(deficit * 100)}% deficit from your maintenance "
            f"of {tdee} calories. {note}"
        )

    if goal == "bulk":
        surplus = 0.10
        if experience_level == "beginner":
            surplus = 0.15
        elif experience_level == "advanced":
            surplus = 0.05
        if body_fat_percentage and body_fat_percentage < 15:
            surplus += 0.05
        calories = _round(tdee * (1 + surplus))
        if experience_level == "beginner":
            note = "As a beginner, you can build muscle faster, so a moderate surplus maximizes gains."
        elif experience_level == "advanced":
            note = "As an advanced lifter, we use a smaller surplus to minimize fat gain while maximizing lean tissue growth."
        else:
            note = "This surplus supports steady muscle growth while keeping fat gain in check."
        return calories, (
            f"Your calorie target is set at a {_round(surplus * 100)}% surplus above your maintenance "
            f"of {tdee} calories. {note}"
        )

    return tdee, (
        f"Your calorie target is set right at your maintenance level of {tdee} calories. Body "
        "recomposition works by building muscle while maintaining weight: high protein intake and "
        "progressive training matter more than a caloric shift."
    )


def calculate_macros(
    calorie_target: int,
    weight_kg: float,
    goal: str,
    body_fat_percentage: Optional[float],
) -> Dict[str, Any]:
    weight_lbs = weight_kg * KG_TO_LB

    if goal == "cut":
        protein_per_lb = 1.1 if body_fat_percentage and body_fat_percentage < 15 else 1.0
    elif goal == "bulk":
        protein_per_lb = 0.8
    else:
        protein_per_lb = 0.9

    protein = _round(weight_lbs * protein_per_lb)
    fat = max(_round(calorie_target * 0.27 / 9), _round(weight_lbs * 0.3))
    carbs = max(_round((calorie_target - protein * 4 - fat * 9) / 4), MIN_CARBS_G)

    if goal == "cut":
        why = "Higher protein helps preserve lean muscle tissue during your cut."
    elif goal == "bulk":
        why = "This protein level supports maximal muscle protein synthesis."
    else:
        why = "Adequate protein is crucial for body recomposition."
    explanation = (
        f"**Protein: {protein}g** ({protein_per_lb}g per lb of bodyweight). {why}\n\n"
        f"**Fat: {fat}g**. Essential for hormone production, joint health, and nutrient absorption.\n\n"
        f"**Carbs: {carbs}g**. Fills the remaining calories and fuels training and recovery."
    )
    return {"protein_g": protein, "fat_g": fat, "carbs_g": carbs, "explanation": explanation}


def generate_macro_targets(onboarding: Mapping[str, Any]) -> Dict[str, Any]:
    """Payload for a system-computed macro target version."""
    bmr, formula = calculate_bmr(onboarding)
    tdee = calculate_tdee(bmr, str(onboarding.get("activity_level") or ""))
    body_fat = onboarding.get("body_fat_percentage")
    calories, _ = calculate_calorie_target(
        tdee,
        str(onboarding.get("goal") or ""),
        body_fat,
        str(onboarding.get("experience_level") or ""),
    )
    macros = calculate_macros(calories, float(onboarding["weight_kg"]), str(onboarding.get("goal") or ""), body_fat)

    if formula == "katch_mcardle":
        formula_note = (
            "Your BMR was calculated using the Katch-McArdle formula, which uses your body fat "
            "percentage for a more accurate estimate."
        )
    else:
        formula_note = (
            "Your BMR was estimated using the Mifflin-St Jeor formula. For a more precise "
            "calculation, provide your body fat percentage in future updates."
        )

    return {
        "bmr": bmr,
        "tdee": tdee,
        "calorie_target": calories,
        "protein_g": macros["protein_g"],
        "carbs_g": macros["carbs_g"],
        "fat_g": macros["fat_g"],
        "formula_used": formula,
        "explanation": f"{formula_note}\n\n{macros['explanation']}",
    }
