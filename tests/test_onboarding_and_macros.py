# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from coachhub.errors import NotFound
from coachhub.macros.calculator import (
    calculate_bmr,
    calculate_calorie_target,
    calculate_tdee,
    generate_macro_targets,
)
from coachhub.macros.service import latest_macro_targets, regenerate_macro_targets
from coachhub.onboarding.models import OnboardingSubmission
from coachhub.onboarding.service import latest_onboarding, submit_onboarding
from coachhub.profiles.storage import get_profile
from coachhub.records import RecordKind, VersionedRecordStore

from ._support import TempDbTestCase, make_user

ANSWERS = {
    "age": 30,
    "sex": "male",
    "height_cm": 180,
    "weight_kg": 80,
    "goal": "recomp",
    "goal_weight_kg": 78,
    "activity_level": "moderate",
    "diet_type": "standard",
    "meals_per_day": 4,
    "cooking_skill": "medium",
    "budget": "medium",
    "workout_frequency": 4,
    "workout_location": "gym",
    "experience_level": "intermediate",
    "split_preference": "upper_lower",
    "time_per_session": 60,
    "cardio_preference": "light",
    "plan_duration_weeks": 8,
}


class TestOnboarding(TempDbTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = make_user("client@example.com")
        self.store = VersionedRecordStore()

    def test_defaults_fill_optional_answers(self) -> None:
        submission = OnboardingSubmission(**ANSWERS)
        self.assertEqual(submission.average_steps, 8000)
        self.assertEqual(submission.sleep_hours, 7)
        self.assertEqual(submission.stress_level, "medium")
        self.assertEqual(submission.job_type, "desk")
        self.assertEqual(submission.allergies, [])
        self.assertFalse(submission.body_fat_unsure)

    def test_out_of_range_answers_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            OnboardingSubmission(**{**ANSWERS, "workout_frequency": 7})
        with self.assertRaises(ValueError):
            OnboardingSubmission(**{**ANSWERS, "plan_duration_weeks": 6})

    def test_every_submission_is_a_new_version(self) -> None:
        uid = self.user["id"]
        self.assertFalse(get_profile(uid)["onboarding_completed"])

        first = submit_onboarding(uid, OnboardingSubmission(**ANSWERS), store=self.store)
        second = submit_onboarding(uid, OnboardingSubmission(**{**ANSWERS, "weight_kg": 79}), store=self.store)
        self.assertEqual((first.version, second.version), (1, 2))
        self.assertTrue(get_profile(uid)["onboarding_completed"])

        latest = latest_onboarding(uid, store=self.store)
        self.assertEqual(latest["version"], 2)
        self.assertEqual(latest["weight_kg"], 79)
        self.assertEqual(len(self.store.history(uid, RecordKind.onboarding)), 2)

    def test_no_onboarding_yet(self) -> None:
        self.assertIsNone(latest_onboarding(self.user["id"], store=self.store))


class TestMacroCalculator(unittest.TestCase):
    def test_mifflin_st_jeor_recomp(self) -> None:
        result = generate_macro_targets(ANSWERS)
        self.assertEqual(result["bmr"], 1780)
        self.assertEqual(result["tdee"], 2759)
        self.assertEqual(result["calorie_target"], 2759)
        self.assertEqual(result["protein_g"], 159)
        self.assertEqual(result["fat_g"], 83)
        self.assertEqual(result["carbs_g"], 344)
        self.assertEqual(result["formula_used"], "mifflin_st_jeor")

    def test_katch_mcardle_when_body_fat_known(self) -> None:
        bmr, formula = calculate_bmr({**ANSWERS, "body_fat_percentage": 20})
        self.assertEqual(formula, "katch_mcardle")
        self.assertEqual(bmr, round(370 + 21.6 * 64))

        _, formula = calculate_bmr({**ANSWERS, "body_fat_percentage": 20, "body_fat_unsure": True})
        self.assertEqual(formula, "mifflin_st_jeor")

    def test_halves_round_up(self) -> None:
        # 800 + 1137.5 - 150 + 5 = 1792.5
        bmr, _ = calculate_bmr({**ANSWERS, "height_cm": 182})
        self.assertEqual(bmr, 1793)

    def test_female_bmr_and_unknown_activity(self) -> None:
        bmr, _ = calculate_bmr({**ANSWERS, "sex": "female"})
        self.assertEqual(bmr, 1614)
        self.assertEqual(calculate_tdee(1000, "unknown"), 1550)

    def test_cut_and_bulk_targets(self) -> None:
        self.assertEqual(calculate_calorie_target(2500, "cut", None, "beginner")[0], 2000)
        self.assertEqual(calculate_calorie_target(2000, "cut", 30, "beginner")[0], 1500)
        self.assertEqual(calculate_calorie_target(2000, "bulk", None, "advanced")[0], 2100)
        self.assertEqual(calculate_calorie_target(2000, "bulk", None, "beginner")[0], 2300)


class TestMacroService(TempDbTestCase):
    def test_requires_onboarding(self) -> None:
        with self.assertRaises(NotFound):
            regenerate_macro_targets("nobody")
        self.assertIsNone(latest_macro_targets("nobody"))

    def test_regenerate_appends_version(self) -> None:
        user = make_user("macro@example.com")
        submit_onboarding(user["id"], OnboardingSubmission(**ANSWERS))
        first = regenerate_macro_targets(user["id"])
        second = regenerate_macro_targets(user["id"])
        self.assertEqual((first.version, second.version), (1, 2))
        self.assertEqual(latest_macro_targets(user["id"]).calorie_target, 2759)


if __name__ == "__main__":
    unittest.main()
