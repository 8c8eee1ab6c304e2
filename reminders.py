# reminders.py
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional

from billing import is_active
from models import Subscription

TOMORROW_WINDOW = 1
THREE_DAY_WINDOW = 3


@dataclass
class Reminders:
  due_tomorrow: List[Subscription] = field(default_factory=list)
  due_in_three_days: List[Subscription] = field(default_factory=list)


def _day(d) -> date:
  return d.date() if isinstance(d, datetime) else d


def days_until(next_payment_date, today: date) -> int:
  return (_day(next_payment_date) - _day(today)).days


def classify_reminders(subscriptions: Iterable, today: Optional[date] = None) -> Reminders:
  """Split active subscriptions into the two reminder buckets.

  Due today counts as due tomorrow. Overdue and paused subscriptions are left
  out, and a subscription lands in at most one bucket.
  """
  today = _day(today or date.today())
  out = Reminders()
  for sub in subscriptions:
    if not is_active(sub):
      continue
    diff = days_until(sub.next_payment_date, today)
    if 0 <= diff <= TOMORROW_WINDOW:
      out.due_tomorrow.append(sub)
    elif 0 <= diff <= THREE_DAY_WINDOW:
      out.due_in_three_days.append(sub)
  return out
