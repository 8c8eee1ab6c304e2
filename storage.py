# storage.py
import calendar
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from models import PAID, PaymentHistory, Subscription

logger = logging.getLogger(__name__)

# demo rows shown to first-time users (POST /api/seed)
SAMPLE_SUBSCRIPTIONS = [
  dict(name="CopyCoder", amount=23.65, currency="AUD", billing_cycle="Monthly", next_payment_date=date(2025, 4, 18),
       status="Active", notes="Software to generate code", icon="sync-alt", icon_color="#3B82F6"),
  dict(name="YouTube", amount=10.00, currency="AUD", billing_cycle="Monthly", next_payment_date=date(2025, 4, 15),
       status="Active", notes="Premium music and video subscription", icon="youtube", icon_color="#EF4444"),
  dict(name="Acubas Ai", amount=16.00, currency="AUD", billing_cycle="Monthly", next_payment_date=date(2025, 4, 21),
       status="Active", notes="AI service for content generation", icon="robot", icon_color="#60A5FA"),
  dict(name="Amaysim", amount=15.00, currency="AUD", billing_cycle="Monthly", next_payment_date=date(2025, 4, 30),
       status="Active", notes="Mobile phone subscription", icon="mobile-alt", icon_color="#34D399"),
  dict(name="Netflix", amount=19.90, currency="AUD", billing_cycle="Monthly", next_payment_date=date(2025, 4, 15),
       status="Paused", notes="Movies and TV shows streaming service", icon="film", icon_color="#DC2626"),
]


def months_before(d: date, months: int) -> date:
  y, m = divmod(d.year * 12 + d.month - 1 - months, 12)
  last = calendar.monthrange(y, m + 1)[1]
  return date(y, m + 1, min(d.day, last))


class SubscriptionStore:
  """Subscriptions and their payment history, one session per request."""

  def __init__(self, session: Session):
    self.session = session

  # subscriptions

  def list(self) -> List[Subscription]:
    return list(self.session.exec(select(Subscription)).all())

  def get(self, subscription_id: int) -> Optional[Subscription]:
    return self.session.get(Subscription, subscription_id)

  def create(self, data: Dict[str, Any]) -> Subscription:
    sub = Subscription(**data)
    self.session.add(sub)
    self.session.commit()
    self.session.refresh(sub)
    logger.info("created subscription %s (%s)", sub.id, sub.name)
    return sub

  def update(self, subscription_id: int, changes: Dict[str, Any]) -> Optional[Subscription]:
    sub = self.get(subscription_id)
    if not sub:
      return None

    changes = {k: v for k, v in changes.items() if k != "id"}
    for key, value in changes.items():
      setattr(sub, key, value)
    self.session.add(sub)
    self.session.commit()
    self.session.refresh(sub)
    logger.info("updated subscription %s: %s", sub.id, ", ".join(sorted(changes)) or "no changes")
    return sub

  def delete(self, subscription_id: int) -> bool:
    sub = self.get(subscription_id)
    if not sub:
      return False

    payments = self.session.exec(
      select(PaymentHistory).where(PaymentHistory.subscription_id == subscription_id)
    ).all()
    for p in payments:
      self.session.delete(p)
    self.session.delete(sub)
    self.session.commit()
    logger.info("deleted subscription %s and %d payment(s)", subscription_id, len(payments))
    return True

  # payment history

  def add_payment_history(self, data: Dict[str, Any]) -> PaymentHistory:
    # subscription_id is not checked; payments for unknown ids are accepted
    payment = PaymentHistory(**data)
    self.session.add(payment)
    self.session.commit()
    self.session.refresh(payment)
    logger.info("recorded payment %s for subscription %s", payment.id, payment.subscription_id)
    return payment

  def get_payment_history_by_subscription(self, subscription_id: int) -> List[PaymentHistory]:
    stmt = (
      select(PaymentHistory)
      .where(PaymentHistory.subscription_id == subscription_id)
      .order_by(PaymentHistory.payment_date.desc(), PaymentHistory.id)
    )
    return list(self.session.exec(stmt).all())

  # demo data

  def seed_if_empty(self, today: Optional[date] = None) -> bool:
    if self.session.exec(select(Subscription)).first():
      return False

    today = today or date.today()
    for row in SAMPLE_SUBSCRIPTIONS:
      sub = Subscription(**row)
      self.session.add(sub)
      self.session.flush()
      for i in range(1, 4):
        self.session.add(PaymentHistory(
          subscription_id=sub.id,
          payment_date=months_before(today, i),
          amount=sub.amount,
          currency=sub.currency,
          status=PAID,
        ))
    self.session.commit()
    logger.info("seeded %d sample subscriptions", len(SAMPLE_SUBSCRIPTIONS))
    return True
