"""
Plan limit checks against stored subscriptions and purchases
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from guestmanager.models import Event, EventPurchase, Subscription
from guestmanager.schemas.plan import EventPurchaseCreate, Plan, PlanDecision, SubscriptionUpsert
from guestmanager.services.plan_limits import PlanLimitEvaluator
from guestmanager.services.repositories import EventRepo, GuestRepo, SubscriptionRepo

logger = logging.getLogger(__name__)

def current_period_start(now: Optional[datetime] = None) -> datetime:
    """Start of the current counting period (calendar month, UTC)"""
    now = now or datetime.utcnow()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

class PlanService:
    """Loads plan state for an account/event and asks the evaluator"""

    @staticmethod
    def upsert_subscription(data: SubscriptionUpsert, db: Session) -> Subscription:
        subscription = SubscriptionRepo.get_by_email(db, data.account_email)
        if subscription is None:
            subscription = Subscription(account_email=data.account_email)
            db.add(subscription)

        subscription.plan = data.plan.value
        subscription.promo_code = data.promo_code or None
        subscription.is_admin = data.is_admin
        subscription.current_period_start = current_period_start()
        db.commit()
        db.refresh(subscription)
        logger.info(f"Subscription for {subscription.account_email} set to {subscription.plan}")
        return subscription

    @staticmethod
    def record_purchase(event: Event, data: EventPurchaseCreate, db: Session) -> EventPurchase:
        purchase = EventPurchase(
            event_id=event.id,
            plan=data.plan.value,
            payment_status=data.payment_status.value,
            amount=data.amount
        )
        db.add(purchase)
        db.commit()
        db.refresh(purchase)
        return purchase

    @staticmethod
    def can_create_event(organizer_email: str, db: Session) -> PlanDecision:
        subscription = SubscriptionRepo.get_by_email(db, organizer_email)
        event_count = EventRepo.count_created_since(db, organizer_email, current_period_start())

        if subscription is None:
            return PlanLimitEvaluator.evaluate_create_event(Plan.FREE, event_count)

        return PlanLimitEvaluator.evaluate_create_event(
            subscription.plan,
            event_count,
            promo_code=subscription.promo_code,
            is_admin=bool(subscription.is_admin)
        )

    @staticmethod
    def can_add_guests(event: Event, to_add: int, db: Session) -> PlanDecision:
        """Check the event's guest total after adding to_add guests"""
        subscription = SubscriptionRepo.get_by_email(db, event.organizer_email)
        purchase = SubscriptionRepo.paid_purchase_for_event(db, event.id)
        proposed = GuestRepo.count_for_event(db, event.id) + to_add

        return PlanLimitEvaluator.evaluate_add_guests(
            subscription.plan if subscription else Plan.FREE,
            proposed,
            event_purchase=purchase,
            promo_code=subscription.promo_code if subscription else None,
            is_admin=bool(subscription and subscription.is_admin)
        )

    @staticmethod
    def guest_limit_for_event(event: Event, db: Session) -> Optional[int]:
        subscription = SubscriptionRepo.get_by_email(db, event.organizer_email)
        purchase = SubscriptionRepo.paid_purchase_for_event(db, event.id)
        plan = PlanLimitEvaluator.resolve_effective_plan(
            subscription.plan if subscription else Plan.FREE,
            purchase
        )
        if subscription and subscription.is_admin:
            return None
        if subscription and subscription.promo_code and plan == Plan.FREE:
            return None
        return PlanLimitEvaluator.get_guest_limit(plan)
