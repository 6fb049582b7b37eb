# repository.py
import datetime as dt
from typing import List, Protocol

from sqlalchemy import delete, update
from sqlmodel import Session, select

from models import Invoice


class InvoiceNotFound(LookupError):
  pass


class InvoiceRepository(Protocol):
  def insert(self, customer_id: str, amount: int, status: str, date: dt.date) -> str: ...
  def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None: ...
  def delete(self, invoice_id: str) -> None: ...
  def list(self) -> List[Invoice]: ...


class SQLInvoiceRepository:
  """One statement per mutation against the ``invoices`` table."""

  def __init__(self, session: Session):
    self.session = session

  def insert(self, customer_id: str, amount: int, status: str, date: dt.date) -> str:
    inv = Invoice(customer_id=customer_id, amount=amount, status=status, date=date)
    invoice_id = inv.id
    try:
      self.session.add(inv)
      self.session.commit()
    except Exception:
      self.session.rollback()
      raise
    return invoice_id

  def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
    stmt = (
      update(Invoice)
      .where(Invoice.id == invoice_id)
      .values(customer_id=customer_id, amount=amount, status=status)
    )
    if self._execute(stmt) == 0:
      raise InvoiceNotFound(invoice_id)

  def delete(self, invoice_id: str) -> None:
    # deleting a missing id is a no-op
    self._execute(delete(Invoice).where(Invoice.id == invoice_id))

  def list(self) -> List[Invoice]:
    return list(self.session.exec(select(Invoice).order_by(Invoice.date.desc())).all())

  def _execute(self, stmt) -> int:
    try:
      result = self.session.execute(stmt)
      self.session.commit()
    except Exception:
      self.session.rollback()
      raise
    return result.rowcount
