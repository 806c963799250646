# -*- coding: utf-8 -*-
"""Response key normalization.

Every outward-facing payload uses snake_case keys. ``to_snake_case`` is applied on read to
whole records, recursively, except for structured JSON documents (plan data, grocery lists,
quiz answers) which are passed through as stored.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

PRESERVED_KEYS = frozenset({"plan_data", "grocery_list", "quiz_answers"})

_CAMEL_BOUNDARY = re.compile(r"[A-Z]")


def camel_to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda m: "_" + m.group(0).lower(), key)


def to_snake_case(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (list, tuple)):
        return [to_snake_case(v) for v in obj]
    if isinstance(obj, dict):
        result = {}
        for key, value in obj.items():
            snake_key = camel_to_snake(str(key))
            if snake_key in PRESERVED_KEYS:
                result[snake_key] = value
            else:
                result[snake_key] = to_snake_case(value)
        return result
    return obj
