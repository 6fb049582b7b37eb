# models.py
import uuid
import datetime as dt
from typing import Literal

from sqlmodel import SQLModel, Field

InvoiceStatus = Literal["pending", "paid"]
INVOICE_STATUSES = ("pending", "paid")

def new_invoice_id() -> str:
  return str(uuid.uuid4())

class Invoice(SQLModel, table=True):
  __tablename__ = "invoices"

  id: str = Field(default_factory=new_invoice_id, primary_key=True, index=True)
  customer_id: str = Field(index=True)
  amount: int  # minor units (cents)
  status: str = "pending"  # pending|paid
  date: dt.date
