# -*- coding: utf-8 -*-
"""Domain errors.

They subclass ``HTTPException`` so storage/service code can raise them directly and FastAPI
surfaces them with the right status code.
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import HTTPException


class ValidationError(HTTPException):
    """Missing or malformed required fields. ``fields`` maps field name -> problem."""

    def __init__(self, message: str, fields: Optional[Dict[str, str]] = None) -> None:
        self.message = message
        self.fields = dict(fields or {})
        super().__init__(status_code=400, detail={"error": message, "fields": self.fields})


class NotFound(HTTPException):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(status_code=404, detail=message)


class Conflict(HTTPException):
    """Version allocation kept colliding after the bounded retries."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(status_code=409, detail=message)
