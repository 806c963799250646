# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from coachhub.coach.overrides import (
    apply_coach_edit,
    apply_coach_override,
    edit_meal_plan,
    edit_training_plan,
)
from coachhub.errors import NotFound, ValidationError
from coachhub.plans.storage import save_generated_meal_plan, save_generated_training_plan
from coachhub.records import RecordKind, VersionedRecordStore

from ._support import TempDbTestCase

USER = "client-1"


class TestMacroOverride(TempDbTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = VersionedRecordStore()

    def test_override_without_prior_targets_then_again(self) -> None:
        first = apply_coach_override(
            USER, calorie_target=2000, protein_g=150, carbs_g=200, fat_g=70, store=self.store
        )
        self.assertEqual(first.version, 1)
        self.assertEqual(first.bmr, 0)
        self.assertEqual(first.tdee, 0)
        self.assertEqual(first.formula_used, "coach_override")
        self.assertEqual(first.explanation, "Coach manual override")

        second = apply_coach_override(
            USER,
            calorie_target=1800,
            protein_g=160,
            carbs_g=150,
            fat_g=65,
            explanation="Deload week",
            store=self.store,
        )
        self.assertEqual(second.version, 2)
        self.assertEqual((second.bmr, second.tdee), (0, 0))
        self.assertEqual(second.calorie_target, 1800)
        self.assertEqual(second.explanation, "Deload week")

        versions = self.store.history(USER, RecordKind.macro_targets)
        self.assertEqual([r.version for r in versions], [2, 1])
        self.assertEqual(versions[1].payload["calorie_target"], 2000)

    def test_override_carries_baseline_from_system_targets(self) -> None:
        self.store.append_new_version(
            USER,
            RecordKind.macro_targets,
            {
                "bmr": 1780,
                "tdee": 2759,
                "calorie_target": 2759,
                "protein_g": 159,
                "carbs_g": 344,
                "fat_g": 83,
                "formula_used": "mifflin_st_jeor",
                "explanation": "system",
            },
        )
        result = apply_coach_override(
            USER, calorie_target=2500, protein_g=170, carbs_g=280, fat_g=80, store=self.store
        )
        self.assertEqual(result.version, 2)
        self.assertEqual(result.bmr, 1780)
        self.assertEqual(result.tdee, 2759)
        self.assertEqual(result.protein_g, 170)

        system = self.store.history(USER, RecordKind.macro_targets)[-1]
        self.assertEqual(system.payload["calorie_target"], 2759)
        self.assertEqual(system.payload["formula_used"], "mifflin_st_jeor")

    def test_invalid_fields_are_all_reported_and_nothing_is_written(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            apply_coach_override(USER, calorie_target=0, protein_g=-5, carbs_g=None, fat_g=70, store=self.store)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(
            ctx.exception.fields,
            {"calorie_target": "must be positive", "protein_g": "must be positive", "carbs_g": "required"},
        )
        self.assertEqual(self.store.history(USER, RecordKind.macro_targets), [])

    def test_non_finite_values_are_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            apply_coach_override(
                USER,
                calorie_target=float("nan"),
                protein_g=float("inf"),
                carbs_g=float("-inf"),
                fat_g=70,
                store=self.store,
            )
        self.assertEqual(
            ctx.exception.fields,
            {"calorie_target": "must be positive", "protein_g": "must be positive", "carbs_g": "must be positive"},
        )
        self.assertIsNone(self.store.latest(USER, RecordKind.macro_targets))

    def test_non_numeric_values_are_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            apply_coach_override(
                USER, calorie_target="2000", protein_g=True, carbs_g=200, fat_g=70, store=self.store
            )
        self.assertEqual(
            ctx.exception.fields,
            {"calorie_target": "must be a number", "protein_g": "must be a number"},
        )


class TestPlanEdits(TempDbTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = VersionedRecordStore()

    def test_training_plan_edit_without_plan_is_not_found(self) -> None:
        with self.assertRaises(NotFound) as ctx:
            edit_training_plan(USER, {"weeks": []}, store=self.store)
        self.assertEqual(ctx.exception.detail, "No training plan found for this client")
        self.assertIsNone(self.store.latest(USER, RecordKind.training_plan))

    def test_meal_plan_edit_keeps_version_and_unsent_fields(self) -> None:
        generated = save_generated_meal_plan(
            USER,
            {"days": [{"day": 1, "meals": []}]},
            [{"item": "Oats", "quantity": "500g"}],
            store=self.store,
        )
        self.assertEqual(generated.version, 1)

        edited = edit_meal_plan(USER, {"days": [{"day": 1, "meals": ["eggs"]}]}, store=self.store)
        self.assertEqual(edited.version, 1)
        self.assertEqual(edited.id, generated.id)
        self.assertEqual(edited.created_at, generated.created_at)
        self.assertEqual(edited.plan_data, {"days": [{"day": 1, "meals": ["eggs"]}]})
        self.assertEqual(edited.grocery_list, [{"item": "Oats", "quantity": "500g"}])

        history = self.store.history(USER, RecordKind.meal_plan)
        self.assertEqual(len(history), 1)

    def test_meal_plan_edit_replaces_grocery_list_when_sent(self) -> None:
        save_generated_meal_plan(USER, {"days": []}, [{"item": "Rice"}], store=self.store)
        edited = edit_meal_plan(USER, {"days": ["x"]}, [{"item": "Quinoa"}], store=self.store)
        self.assertEqual(edited.grocery_list, [{"item": "Quinoa"}])

    def test_training_plan_edit_only_touches_latest(self) -> None:
        save_generated_training_plan(USER, {"weeks": [1]}, 4, store=self.store)
        save_generated_training_plan(USER, {"weeks": [2]}, 8, store=self.store)

        edited = edit_training_plan(USER, {"weeks": ["edited"]}, store=self.store)
        self.assertEqual(edited.version, 2)
        self.assertEqual(edited.duration_weeks, 8)

        history = self.store.history(USER, RecordKind.training_plan)
        self.assertEqual(history[0].payload["plan_data"], {"weeks": ["edited"]})
        self.assertEqual(history[1].payload["plan_data"], {"weeks": [1]})

    def test_empty_plan_data_is_accepted(self) -> None:
        save_generated_meal_plan(USER, {"days": [1]}, [{"item": "Rice"}], store=self.store)
        edited = edit_meal_plan(USER, {}, store=self.store)
        self.assertEqual(edited.plan_data, {})
        self.assertEqual(edited.grocery_list, [{"item": "Rice"}])

    def test_explicit_none_clears_grocery_list(self) -> None:
        save_generated_meal_plan(USER, {"days": []}, [{"item": "Rice"}], store=self.store)
        edited = edit_meal_plan(USER, {"days": ["x"]}, None, store=self.store)
        self.assertIsNone(edited.grocery_list)
        latest = self.store.latest(USER, RecordKind.meal_plan)
        self.assertIn("grocery_list", latest.payload)
        self.assertIsNone(latest.payload["grocery_list"])

    def test_plan_data_is_required(self) -> None:
        save_generated_meal_plan(USER, {"days": []}, store=self.store)
        with self.assertRaises(ValidationError) as ctx:
            apply_coach_edit(USER, RecordKind.meal_plan, {"grocery_list": []}, store=self.store)
        self.assertEqual(ctx.exception.fields, {"plan_data": "required"})
        with self.assertRaises(ValidationError):
            apply_coach_edit(USER, RecordKind.meal_plan, {"plan_data": "not a dict"}, store=self.store)

    def test_unknown_fields_and_kinds_are_rejected(self) -> None:
        save_generated_training_plan(USER, {"weeks": []}, 4, store=self.store)
        with self.assertRaises(ValidationError) as ctx:
            apply_coach_edit(
                USER, RecordKind.training_plan, {"plan_data": {"a": 1}, "grocery_list": []}, store=self.store
            )
        self.assertEqual(ctx.exception.fields, {"grocery_list": "not editable"})

        with self.assertRaises(ValidationError):
            apply_coach_edit(USER, "macro_targets", {"plan_data": {"a": 1}}, store=self.store)


if __name__ == "__main__":
    unittest.main()
