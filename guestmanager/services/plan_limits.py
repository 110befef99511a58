"""
Plan limit rules

Two plans take part in every decision and are never merged: the account
subscription plan, which limits event creation, and the plan purchased for a
single event, which limits that event's guest count.
"""

import logging
from typing import Optional, Union

from guestmanager.core.messages import translate
from guestmanager.schemas.plan import EventPurchaseInfo, PaymentStatus, Plan, PlanDecision

logger = logging.getLogger(__name__)

PlanLike = Union[Plan, str, None]

GUEST_LIMITS = {
    Plan.FREE: 50,
    Plan.ESSENTIAL: 200,
    Plan.PREMIUM: None,
    Plan.PROFESSIONAL: None,
}

FREE_EVENT_LIMIT = 1
PROMO_EVENT_LIMIT = 2

class PlanLimitEvaluator:
    """Allow/deny decisions for event creation and guest additions"""

    @staticmethod
    def get_guest_limit(plan: PlanLike) -> Optional[int]:
        """Guests allowed per event on a plan; None means unlimited"""
        return GUEST_LIMITS[Plan.parse(plan)]

    @staticmethod
    def get_event_limit(plan: PlanLike, promo_code: Optional[str] = None) -> Optional[int]:
        """Events per period at the account level; None means unlimited.

        Paid tiers have no account-level cap here, their period limits belong
        to the billing provider.
        """
        if Plan.parse(plan) != Plan.FREE:
            return None
        return PROMO_EVENT_LIMIT if promo_code else FREE_EVENT_LIMIT

    @staticmethod
    def resolve_effective_plan(
        account_plan: PlanLike,
        event_purchase: Union[EventPurchaseInfo, PlanLike] = None
    ) -> Plan:
        """The event's paid purchase if there is one, otherwise the account plan.

        A bare plan value for ``event_purchase`` is taken as already paid.
        """
        if event_purchase is None:
            return Plan.parse(account_plan)
        if isinstance(event_purchase, (Plan, str)):
            return Plan.parse(event_purchase)
        if PaymentStatus(event_purchase.payment_status) == PaymentStatus.PAID:
            return Plan.parse(event_purchase.plan)
        return Plan.parse(account_plan)

    @staticmethod
    def evaluate_create_event(
        account_plan: PlanLike,
        current_event_count: int,
        promo_code: Optional[str] = None,
        is_admin: bool = False,
        language: Optional[str] = None
    ) -> PlanDecision:
        plan = Plan.parse(account_plan)

        if is_admin:
            return PlanDecision(
                allowed=True,
                message=translate("admin_unlimited", language),
                plan=plan,
                reason="admin"
            )

        limit = PlanLimitEvaluator.get_event_limit(plan, promo_code)
        if limit is not None and current_event_count >= limit:
            if promo_code:
                message = translate("promo_event_limit", language, limit=limit)
            else:
                message = translate("free_event_limit", language)
            logger.info(f"Event creation denied on plan {plan.value}: {current_event_count}/{limit} events")
            return PlanDecision(
                allowed=False,
                message=message,
                plan=plan,
                limit=limit,
                reason="event_limit"
            )

        return PlanDecision(
            allowed=True,
            message=translate("event_allowed", language),
            plan=plan,
            limit=limit
        )

    @staticmethod
    def evaluate_add_guests(
        account_plan: PlanLike,
        proposed_guest_count: int,
        event_purchase: Union[EventPurchaseInfo, PlanLike] = None,
        promo_code: Optional[str] = None,
        is_admin: bool = False,
        language: Optional[str] = None
    ) -> PlanDecision:
        """Check an event's total guest count after the addition against its effective plan"""
        plan = PlanLimitEvaluator.resolve_effective_plan(account_plan, event_purchase)

        if is_admin:
            return PlanDecision(
                allowed=True,
                message=translate("admin_unlimited", language),
                plan=plan,
                reason="admin"
            )

        limit = PlanLimitEvaluator.get_guest_limit(plan)
        # Promo accounts get unlimited guests on the free tier
        if promo_code and plan == Plan.FREE:
            limit = None

        if limit is not None and proposed_guest_count > limit:
            logger.info(f"Guest addition denied on plan {plan.value}: {proposed_guest_count}/{limit} guests")
            return PlanDecision(
                allowed=False,
                message=translate("guest_limit", language, limit=limit),
                plan=plan,
                limit=limit,
                reason="guest_limit"
            )

        return PlanDecision(
            allowed=True,
            message=translate("guests_allowed", language),
            plan=plan,
            limit=limit
        )
