# -*- coding: utf-8 -*-
"""Payment events — internal endpoint fed by the payment integration (admin credentials)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import require_admin
from .models import PaymentEvent, PaymentEventResult
from .subscriptions import apply_subscription_event

router = APIRouter(prefix="/api/payments", tags=["Payments"], dependencies=[Depends(require_admin)])


@router.post("/events", response_model=PaymentEventResult, summary="Apply a verified payment event")
def payment_event(event: PaymentEvent):
    return PaymentEventResult(type=event.type, updated=apply_subscription_event(event.model_dump()))
