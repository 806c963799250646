# -*- coding: utf-8 -*-
"""Profiles — Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

UserRole = Literal["client", "coach", "admin"]
SubscriptionStatus = Literal["none", "active", "past_due", "canceled", "trialing"]


class Profile(BaseModel):
    user_id: str
    email: str
    full_name: str = ""
    role: UserRole = "client"
    subscription_status: SubscriptionStatus = "none"
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    current_period_end: Optional[str] = None
    onboarding_completed: bool = False
    created_at: str
    updated_at: str


class PaymentEvent(BaseModel):
    """A payment-provider event whose signature the integration has already checked."""

    type: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)


class PaymentEventResult(BaseModel):
    type: str
    updated: int
