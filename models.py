# models.py
from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, ValidationInfo, field_validator
from pydantic import Field as PField
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel, Field


class Currency(str, Enum):
  AUD = "AUD"
  USD = "USD"
  EUR = "EUR"
  GBP = "GBP"


class BillingCycle(str, Enum):
  WEEKLY = "Weekly"
  MONTHLY = "Monthly"
  QUARTERLY = "Quarterly"
  YEARLY = "Yearly"


class SubscriptionStatus(str, Enum):
  ACTIVE = "Active"
  PAUSED = "Paused"


PAID = "Paid"


class Subscription(SQLModel, table=True):
  __tablename__ = "subscriptions"
  # ids are never handed out twice, even after a delete
  __table_args__ = {"sqlite_autoincrement": True}

  id: Optional[int] = Field(default=None, primary_key=True)
  name: str
  amount: float
  currency: str = Currency.AUD.value
  billing_cycle: str = BillingCycle.MONTHLY.value
  next_payment_date: date
  status: str = SubscriptionStatus.ACTIVE.value
  notes: Optional[str] = None
  icon: Optional[str] = "sync-alt"
  icon_color: Optional[str] = "#3B82F6"


class PaymentHistory(SQLModel, table=True):
  __tablename__ = "payment_history"
  __table_args__ = {"sqlite_autoincrement": True}

  id: Optional[int] = Field(default=None, primary_key=True)
  subscription_id: int = Field(index=True)  # not a FK, the store cascades deletes
  payment_date: date
  amount: float
  currency: str = Currency.AUD.value
  status: str = PAID


# ---- API schemas (camelCase on the wire) ----

class ApiModel(BaseModel):
  model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


def _to_date(v):
  # full ISO timestamps are tolerated; only the calendar day is kept
  if isinstance(v, datetime):
    return v.date()
  if isinstance(v, str) and "T" in v:
    return datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
  return v


def _clean_name(v: str) -> str:
  v = v.strip()
  if not v:
    raise ValueError("name must not be empty")
  return v


Day = Annotated[date, BeforeValidator(_to_date)]
Name = Annotated[str, AfterValidator(_clean_name)]
Amount = Annotated[float, PField(gt=0, allow_inf_nan=False)]


class SubscriptionCreate(ApiModel):
  model_config = ConfigDict(validate_default=True)

  name: Name
  amount: Amount
  currency: Currency = Currency.AUD
  billing_cycle: BillingCycle = BillingCycle.MONTHLY
  next_payment_date: Day
  status: SubscriptionStatus = SubscriptionStatus.ACTIVE
  notes: Optional[str] = None
  icon: Optional[str] = "sync-alt"
  icon_color: Optional[str] = "#3B82F6"


class SubscriptionUpdate(ApiModel):
  name: Optional[Name] = None
  amount: Optional[Amount] = None
  currency: Optional[Currency] = None
  billing_cycle: Optional[BillingCycle] = None
  next_payment_date: Optional[Day] = None
  status: Optional[SubscriptionStatus] = None
  notes: Optional[str] = None
  icon: Optional[str] = None
  icon_color: Optional[str] = None

  @field_validator("name", "amount", "currency", "billing_cycle", "next_payment_date", "status")
  @classmethod
  def _not_null(cls, v, info: ValidationInfo):
    if v is None:
      raise ValueError(f"{info.field_name} may not be null")
    return v


class SubscriptionRead(ApiModel):
  model_config = ConfigDict(from_attributes=True)

  id: int
  name: str
  amount: float
  currency: str
  billing_cycle: str
  next_payment_date: date
  status: str
  notes: Optional[str] = None
  icon: Optional[str] = None
  icon_color: Optional[str] = None


class PaymentCreate(ApiModel):
  subscription_id: int
  payment_date: Day
  amount: float
  currency: str = Currency.AUD.value
  status: str = PAID


class PaymentRead(ApiModel):
  model_config = ConfigDict(from_attributes=True)

  id: int
  subscription_id: int
  payment_date: date
  amount: float
  currency: str
  status: str


class SpendSummary(ApiModel):
  monthly_total: float = 0.0
  yearly_total: float = 0.0
  active_count: int = 0
  paused_count: int = 0
  total_count: int = 0


class RemindersRead(ApiModel):
  due_tomorrow: List[SubscriptionRead] = []
  due_in_three_days: List[SubscriptionRead] = []
