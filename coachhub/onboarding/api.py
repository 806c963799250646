# -*- coding: utf-8 -*-
"""Onboarding — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from ..serialize import to_snake_case
from .models import OnboardingSubmission, OnboardingSubmitResponse
from .service import latest_onboarding, submit_onboarding

router = APIRouter(prefix="/api/onboarding", tags=["Onboarding"])


@router.post("", response_model=OnboardingSubmitResponse, summary="Submit onboarding answers")
def submit(request: OnboardingSubmission, user: dict = Depends(get_current_user)):
    record = submit_onboarding(user["id"], request)
    return OnboardingSubmitResponse(version=record.version, onboarding_completed=True)


@router.get("", summary="Latest onboarding answers")
def latest(user: dict = Depends(get_current_user)):
    data = latest_onboarding(user["id"])
    if not data:
        raise HTTPException(status_code=404, detail="No onboarding data found")
    return to_snake_case(data)
