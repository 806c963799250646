# -*- coding: utf-8 -*-
"""Pending macro adjustments — Pydantic models."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

AdjustmentStatus = Literal["pending", "approved", "rejected"]


class PendingAdjustmentCreate(BaseModel):
    calorie_target: float = Field(..., gt=0)
    protein_g: float = Field(..., gt=0)
    carbs_g: float = Field(..., gt=0)
    fat_g: float = Field(..., gt=0)
    reason: str = Field("", max_length=2000)


class PendingAdjustment(BaseModel):
    id: str
    user_id: str
    status: AdjustmentStatus
    calorie_target: float
    protein_g: float
    carbs_g: float
    fat_g: float
    reason: str = ""
    created_at: str


class PendingAdjustmentList(BaseModel):
    count: int
    items: List[PendingAdjustment]
