"""
Test configuration for the SubTrack backend.

Every test gets its own in-memory database, wired into the app by overriding
the get_session dependency.
"""

import os

# db.py refuses to import without a URL - must be set before any app imports
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from db import get_session, init_db, make_engine
from main import app
from models import Subscription
from storage import SubscriptionStore


@pytest.fixture
def engine():
  engine = make_engine("sqlite://")
  init_db(engine)
  yield engine
  engine.dispose()


@pytest.fixture
def session(engine):
  with Session(engine) as session:
    yield session


@pytest.fixture
def store(session):
  return SubscriptionStore(session)


@pytest.fixture
def client(engine):
  def _session_override():
    with Session(engine) as session:
      yield session

  app.dependency_overrides[get_session] = _session_override
  yield TestClient(app)
  app.dependency_overrides.clear()


@pytest.fixture
def make_sub():
  """Unsaved subscription rows for the pure billing/reminder functions."""
  def _make(amount=10.0, billing_cycle="Monthly", status="Active", next_payment_date=date(2025, 4, 20), name="Sub"):
    return Subscription(
      name=name,
      amount=amount,
      billing_cycle=billing_cycle,
      status=status,
      next_payment_date=next_payment_date,
    )
  return _make
