# -*- coding: utf-8 -*-
"""Check-ins — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

PhotoType = Literal["front", "side", "back"]


class CheckInCreateRequest(BaseModel):
    weight_kg: float = Field(..., ge=30, le=300)
    waist_cm: Optional[float] = Field(None, ge=40, le=200)
    adherence_rating: int = Field(..., ge=1, le=10)
    steps_avg: int = Field(0, ge=0, le=50000)
    sleep_avg: float = Field(7, ge=0, le=14)
    notes: str = Field("", max_length=2000)


class ProgressPhoto(BaseModel):
    id: str
    user_id: str
    check_in_id: str
    photo_type: PhotoType
    storage_path: str
    created_at: str
    url: str


class CheckIn(BaseModel):
    id: str
    user_id: str
    week_number: int
    weight_kg: float
    waist_cm: Optional[float] = None
    adherence_rating: int
    steps_avg: int = 0
    sleep_avg: float = 7
    notes: str = ""
    created_at: str
    progress_photos: List[ProgressPhoto] = Field(default_factory=list)


class CheckInListResponse(BaseModel):
    count: int
    check_ins: List[CheckIn]


class ActivityItem(BaseModel):
    id: str
    user_id: str
    week_number: int
    weight_kg: float
    adherence_rating: int
    created_at: str
    client_name: str


class ActivityResponse(BaseModel):
    activity: List[ActivityItem]
