# -*- coding: utf-8 -*-
"""Macro targets — client endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .models import MacroTarget, MacroTargetResponse
from .service import latest_macro_targets, regenerate_macro_targets

router = APIRouter(prefix="/api/macros", tags=["Macros"])


@router.post("", response_model=MacroTargetResponse, summary="Recompute macro targets from onboarding")
def regenerate(user: dict = Depends(get_current_user)):
    return MacroTargetResponse(macro_target=regenerate_macro_targets(user["id"]))


@router.get("", response_model=MacroTarget, summary="Current macro targets")
def current(user: dict = Depends(get_current_user)):
    macros = latest_macro_targets(user["id"])
    if macros is None:
        raise HTTPException(status_code=404, detail="No macro targets found")
    return macros
