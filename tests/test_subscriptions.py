# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from coachhub.profiles.storage import get_profile, list_client_profiles, mark_onboarding_completed, update_subscription
from coachhub.profiles.subscriptions import apply_subscription_event

from ._support import TempDbTestCase, make_user


def _event(event_type: str, **obj) -> dict:
    return {"type": event_type, "data": {"object": obj}}


class TestSubscriptionEvents(TempDbTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = make_user("payer@example.com", full_name="Pat Payer")
        apply_subscription_event(
            _event(
                "checkout.session.completed",
                customer="cus_1",
                subscription="sub_1",
                metadata={"user_id": self.user["id"]},
            )
        )

    def test_checkout_activates_and_links_customer(self) -> None:
        profile = get_profile(self.user["id"])
        self.assertEqual(profile["subscription_status"], "active")
        self.assertEqual(profile["stripe_customer_id"], "cus_1")
        self.assertEqual(profile["stripe_subscription_id"], "sub_1")

    def test_subscription_updates_map_provider_status(self) -> None:
        touched = apply_subscription_event(
            _event("customer.subscription.updated", customer="cus_1", status="past_due", current_period_end=0)
        )
        self.assertEqual(touched, 1)
        profile = get_profile(self.user["id"])
        self.assertEqual(profile["subscription_status"], "past_due")
        self.assertEqual(profile["current_period_end"], "1970-01-01T00:00:00Z")

        apply_subscription_event(_event("customer.subscription.updated", customer="cus_1", status="unpaid"))
        self.assertEqual(get_profile(self.user["id"])["subscription_status"], "canceled")

    def test_deletion_and_failed_payment(self) -> None:
        apply_subscription_event(_event("invoice.payment_failed", customer="cus_1"))
        self.assertEqual(get_profile(self.user["id"])["subscription_status"], "past_due")
        apply_subscription_event(_event("customer.subscription.deleted", customer="cus_1"))
        self.assertEqual(get_profile(self.user["id"])["subscription_status"], "canceled")

    def test_unknown_events_and_customers_touch_nothing(self) -> None:
        self.assertEqual(apply_subscription_event(_event("charge.refunded", customer="cus_1")), 0)
        self.assertEqual(apply_subscription_event(_event("invoice.payment_failed", customer="cus_other")), 0)
        self.assertEqual(apply_subscription_event(_event("checkout.session.completed", customer="cus_2")), 0)
        self.assertEqual(get_profile(self.user["id"])["subscription_status"], "active")

    def test_update_requires_a_match_key(self) -> None:
        with self.assertRaises(ValueError):
            update_subscription(status="active")


class TestProfiles(TempDbTestCase):
    def test_onboarding_flag_flips_once(self) -> None:
        user = make_user("flag@example.com")
        self.assertTrue(mark_onboarding_completed(user["id"]))
        self.assertFalse(mark_onboarding_completed(user["id"]))
        self.assertTrue(get_profile(user["id"])["onboarding_completed"])

    def test_client_listing_excludes_coaches(self) -> None:
        make_user("coach@example.com", role="coach")
        client = make_user("client@example.com")
        self.assertEqual([p["user_id"] for p in list_client_profiles()], [client["id"]])
        self.assertIsNone(get_profile("missing"))


if __name__ == "__main__":
    unittest.main()
