# billing.py
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from models import BillingCycle, SpendSummary, SubscriptionStatus

WEEKS_PER_MONTH = 4.33  # 52 / 12 rounded, same figure the dashboard shows

def _value(v) -> str:
  return getattr(v, "value", v)

def normalize(amount: float, billing_cycle) -> Tuple[float, float]:
  """Monthly and yearly equivalent of one billing-cycle charge.

  Unknown cycles are billed like Monthly instead of failing the whole summary.
  """
  cycle = _value(billing_cycle)
  if cycle == BillingCycle.WEEKLY.value:
    return amount * WEEKS_PER_MONTH, amount * 52
  if cycle == BillingCycle.QUARTERLY.value:
    return amount / 3, amount * 4
  if cycle == BillingCycle.YEARLY.value:
    return amount / 12, amount
  return amount, amount * 12

def round_money(value: float) -> float:
  return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

def is_active(sub) -> bool:
  return _value(sub.status) == SubscriptionStatus.ACTIVE.value

def summarize(subscriptions: Iterable) -> SpendSummary:
  subs = list(subscriptions)
  active = [s for s in subs if is_active(s)]
  parts = [normalize(s.amount, s.billing_cycle) for s in active]

  # fsum is exact, so the totals do not depend on row order
  return SpendSummary(
    monthly_total=round_money(math.fsum(m for m, _ in parts)),
    yearly_total=round_money(math.fsum(y for _, y in parts)),
    active_count=len(active),
    paused_count=len(subs) - len(active),
    total_count=len(subs),
  )
