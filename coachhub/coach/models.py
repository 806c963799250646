# -*- coding: utf-8 -*-
"""Coach notes — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

NoteCategory = Literal["general", "nutrition", "training", "check_in"]
NOTE_CATEGORIES = ("general", "nutrition", "training", "check_in")


class CoachNoteCreate(BaseModel):
    # Checked by add_coach_note so that every problem comes back as one 400.
    user_id: Optional[str] = None
    category: Optional[str] = None
    content: Optional[str] = Field(None, max_length=10000)


class CoachNote(BaseModel):
    id: str
    user_id: str
    coach_id: str
    category: NoteCategory
    content: str
    created_at: str


class CoachNoteList(BaseModel):
    notes: List[CoachNote]


class CoachNoteResponse(BaseModel):
    success: bool = True
    note: CoachNote
