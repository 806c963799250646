# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, timezone
from unittest import mock

from coachhub.coach.models import CoachNoteCreate
from coachhub.coach.notes import add_coach_note, list_coach_notes
from coachhub.errors import NotFound, ValidationError

from ._support import TempDbTestCase, make_user


class TestCoachNotes(TempDbTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.coach = make_user("coach@example.com", role="coach")
        self.client = make_user("client@example.com")

    def _add(self, category: str, content: str):
        return add_coach_note(
            coach_id=self.coach["id"],
            request=CoachNoteCreate(user_id=self.client["id"], category=category, content=content),
        )

    def test_notes_are_listed_newest_first_per_client(self) -> None:
        moment = datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)
        with mock.patch("coachhub.coach.notes.datetime") as clock:
            clock.now.side_effect = [moment, moment, moment.replace(microsecond=1)]
            first = self._add("general", "Intro call done")
            second = self._add("training", "Swap squats for leg press")
            third = self._add("nutrition", "Add a second protein shake")

        self.assertEqual(first["created_at"], "2024-03-01T09:00:00.000000Z")
        self.assertEqual(first["coach_id"], self.coach["id"])
        notes = list_coach_notes(self.client["id"])
        self.assertEqual([n["id"] for n in notes], [third["id"], second["id"], first["id"]])
        self.assertEqual(list_coach_notes(self.coach["id"]), [])

    def test_blank_fields_are_all_reported(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            add_coach_note(
                coach_id=self.coach["id"],
                request=CoachNoteCreate(user_id=" ", category=None, content=""),
            )
        self.assertEqual(
            ctx.exception.fields, {"user_id": "required", "category": "required", "content": "required"}
        )
        self.assertEqual(list_coach_notes(self.client["id"]), [])

    def test_category_and_client_are_checked(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self._add("sleep", "Bed by 11")
        self.assertEqual(ctx.exception.fields, {"category": "invalid"})

        with self.assertRaises(NotFound):
            add_coach_note(
                coach_id=self.coach["id"],
                request=CoachNoteCreate(user_id="nobody", category="general", content="Hello"),
            )


if __name__ == "__main__":
    unittest.main()
