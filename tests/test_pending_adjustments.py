# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from unittest import mock

from coachhub.adjustments.models import PendingAdjustmentCreate
from coachhub.adjustments.storage import count_pending, create_pending_adjustment, list_pending
from coachhub.app_db import db_conn
from coachhub.config import settings

from ._support import TempDbTestCase


def _proposal(calories: float, reason: str = "") -> PendingAdjustmentCreate:
    return PendingAdjustmentCreate(calorie_target=calories, protein_g=150, carbs_g=200, fat_g=70, reason=reason)


class TestPendingAdjustments(TempDbTestCase):
    def test_empty_queue(self) -> None:
        self.assertEqual(list_pending("u1"), [])
        self.assertEqual(count_pending("u1"), 0)

    def test_newest_first(self) -> None:
        for calories in (2000, 2100, 2200):
            create_pending_adjustment(user_id="u1", request=_proposal(calories))
        items = list_pending("u1")
        self.assertEqual([i["calorie_target"] for i in items], [2200, 2100, 2000])
        self.assertTrue(all(i["status"] == "pending" for i in items))
        self.assertEqual(count_pending("u1"), 3)

    def test_only_pending_rows_for_that_client(self) -> None:
        keep = create_pending_adjustment(user_id="u1", request=_proposal(2000, "plateau"))
        resolved = create_pending_adjustment(user_id="u1", request=_proposal(2100))
        create_pending_adjustment(user_id="u2", request=_proposal(2500))
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                "UPDATE pending_macro_adjustments SET status = 'approved' WHERE id = ?",
                (resolved["id"],),
            )

        items = list_pending("u1")
        self.assertEqual([i["id"] for i in items], [keep["id"]])
        self.assertEqual(items[0]["reason"], "plateau")
        self.assertEqual(count_pending("u1"), 1)
        self.assertEqual(count_pending("u2"), 1)

    def test_same_second_rows_keep_insertion_order(self) -> None:
        second = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        with mock.patch("coachhub.adjustments.storage.datetime") as clock:
            clock.now.side_effect = [second, second.replace(microsecond=500000)]
            first = create_pending_adjustment(user_id="u1", request=_proposal(2000))
            later = create_pending_adjustment(user_id="u1", request=_proposal(2100))
        self.assertEqual(first["created_at"], "2024-01-01T12:00:00.000000Z")
        self.assertEqual([i["id"] for i in list_pending("u1")], [later["id"], first["id"]])

    def test_proposal_values_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            PendingAdjustmentCreate(calorie_target=0, protein_g=150, carbs_g=200, fat_g=70)


if __name__ == "__main__":
    unittest.main()
