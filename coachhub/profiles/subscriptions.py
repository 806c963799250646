# -*- coding: utf-8 -*-
"""Subscription status updates driven by payment-provider events.

Signature checks and event fetching belong to the payment integration; this module only maps
an already-verified event onto the profile's subscription fields.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .storage import update_subscription

logger = logging.getLogger(__name__)

_PROVIDER_STATUS = {
    "active": "active",
    "past_due": "past_due",
    "trialing": "trialing",
}


def _epoch_to_iso(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat().replace("+00:00", "Z")


def apply_subscription_event(event: Dict[str, Any]) -> int:
    """Apply one payment event. Returns the number of profiles touched (0 for ignored events)."""
    event_type = str(event.get("type") or "")
    obj = (event.get("data") or {}).get("object") or {}

    if event_type == "checkout.session.completed":
        user_id = (obj.get("metadata") or {}).get("user_id")
        if not user_id:
            return 0
        return update_subscription(
            status="active",
            user_id=user_id,
            stripe_customer_id=obj.get("customer"),
            stripe_subscription_id=obj.get("subscription"),
        )

    if event_type == "customer.subscription.updated":
        status = _PROVIDER_STATUS.get(str(obj.get("status") or ""), "canceled")
        return update_subscription(
            status=status,
            stripe_customer_id=obj.get("customer"),
            current_period_end=_epoch_to_iso(obj.get("current_period_end")),
        )

    if event_type == "customer.subscription.deleted":
        return update_subscription(status="canceled", stripe_customer_id=obj.get("customer"))

    if event_type == "invoice.payment_failed":
        return update_subscription(status="past_due", stripe_customer_id=obj.get("customer"))

    logger.info("Ignoring payment event %s", event_type or "<untyped>")
    return 0
