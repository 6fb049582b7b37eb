# db.py
import os
from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from models import Invoice  # noqa: F401  registers the invoices table

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
  raise RuntimeError("DATABASE_URL is not set in backend .env")

if DATABASE_URL.startswith("sqlite"):
  # one shared connection so in-memory databases survive across sessions
  engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
  )
else:
  engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True)

def init_db() -> None:
  SQLModel.metadata.create_all(engine)

def get_session():
  with Session(engine) as session:
    yield session
