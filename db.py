# db.py
import os
from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
  raise RuntimeError("DATABASE_URL is not set in backend .env")

def make_engine(url: str):
  if not url.startswith("sqlite"):
    return create_engine(url, echo=False, pool_pre_ping=True)
  # in-memory sqlite lives as long as its single connection
  if url in ("sqlite://", "sqlite:///:memory:"):
    return create_engine(url, echo=False, connect_args={"check_same_thread": False}, poolclass=StaticPool)
  return create_engine(url, echo=False, connect_args={"check_same_thread": False})

engine = make_engine(DATABASE_URL)

def init_db(bind=None) -> None:
  # registers the tables on SQLModel.metadata
  import models  # noqa: F401
  SQLModel.metadata.create_all(bind or engine)

def get_session():
  with Session(engine) as session:
    yield session
