# -*- coding: utf-8 -*-
"""Pending macro adjustments — client read endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import get_current_user
from .models import PendingAdjustment, PendingAdjustmentList
from .storage import list_pending

router = APIRouter(prefix="/api/adjustments", tags=["Adjustments"])


@router.get("", response_model=PendingAdjustmentList, summary="My macro adjustments awaiting coach review")
def my_pending_adjustments(user: dict = Depends(get_current_user)):
    rows = list_pending(user["id"])
    return PendingAdjustmentList(count=len(rows), items=[PendingAdjustment.model_validate(r) for r in rows])
