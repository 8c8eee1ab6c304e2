# subscriptions_route.py
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from billing import summarize
from db import get_session
from models import (
  PAID, PaymentCreate, PaymentRead, RemindersRead, SpendSummary,
  SubscriptionCreate, SubscriptionRead, SubscriptionUpdate,
)
from reminders import classify_reminders
from storage import SubscriptionStore

router = APIRouter(prefix="/api", tags=["subscriptions"])

def get_store(session: Session = Depends(get_session)) -> SubscriptionStore:
  return SubscriptionStore(session)

def _match(q: str, *values: str) -> bool:
  ql = q.strip().lower()
  return any(ql in (v or "").lower() for v in values)

def _get_or_404(store: SubscriptionStore, subscription_id: int):
  sub = store.get(subscription_id)
  if not sub:
    raise HTTPException(status_code=404, detail="Subscription not found")
  return sub

@router.get("/subscriptions", response_model=List[SubscriptionRead])
def list_subscriptions(q: Optional[str] = None, store: SubscriptionStore = Depends(get_store)):
  rows = store.list()
  if not q:
    return rows
  return [r for r in rows if _match(q, r.name, r.notes, r.billing_cycle, r.status)]

@router.get("/subscriptions/{subscription_id}", response_model=SubscriptionRead)
def get_subscription(subscription_id: int, store: SubscriptionStore = Depends(get_store)):
  return _get_or_404(store, subscription_id)

@router.post("/subscriptions", response_model=SubscriptionRead, status_code=201)
def create_subscription(data: SubscriptionCreate, store: SubscriptionStore = Depends(get_store)):
  return store.create(data.model_dump())

@router.patch("/subscriptions/{subscription_id}", response_model=SubscriptionRead)
def update_subscription(subscription_id: int, data: SubscriptionUpdate, store: SubscriptionStore = Depends(get_store)):
  sub = store.update(subscription_id, data.model_dump(exclude_unset=True))
  if not sub:
    raise HTTPException(status_code=404, detail="Subscription not found")
  return sub

@router.delete("/subscriptions/{subscription_id}", status_code=204)
def delete_subscription(subscription_id: int, store: SubscriptionStore = Depends(get_store)):
  if not store.delete(subscription_id):
    raise HTTPException(status_code=404, detail="Subscription not found")
  return Response(status_code=204)

@router.get("/subscriptions/{subscription_id}/payments", response_model=List[PaymentRead])
def list_payments(subscription_id: int, store: SubscriptionStore = Depends(get_store)):
  return store.get_payment_history_by_subscription(subscription_id)

@router.post("/subscriptions/{subscription_id}/pay", response_model=PaymentRead, status_code=201)
def pay_subscription(
  subscription_id: int,
  payment_date: Optional[date] = None,
  status: str = PAID,
  store: SubscriptionStore = Depends(get_store),
):
  sub = _get_or_404(store, subscription_id)

  # snapshot the charge as it is now; later edits to the subscription don't touch it
  payment = PaymentCreate(
    subscription_id=sub.id,
    payment_date=payment_date or date.today(),
    amount=sub.amount,
    currency=sub.currency,
    status=status,
  )
  return store.add_payment_history(payment.model_dump())

@router.get("/summary", response_model=SpendSummary)
def get_summary(store: SubscriptionStore = Depends(get_store)):
  return summarize(store.list())

@router.get("/reminders", response_model=RemindersRead)
def get_reminders(today: Optional[date] = None, store: SubscriptionStore = Depends(get_store)):
  buckets = classify_reminders(store.list(), today)
  return RemindersRead(
    due_tomorrow=[SubscriptionRead.model_validate(s) for s in buckets.due_tomorrow],
    due_in_three_days=[SubscriptionRead.model_validate(s) for s in buckets.due_in_three_days],
  )

@router.post("/seed")
def seed_if_empty(store: SubscriptionStore = Depends(get_store)):
  # Seed only if DB is empty
  return {"ok": True, "seeded": store.seed_if_empty()}
