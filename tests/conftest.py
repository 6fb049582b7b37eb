import os

# In-memory SQLite for tests; must be set before db is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FAIL_INVOICE_DELETES", "true")

from typing import Dict, List  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402

from models import Invoice, new_invoice_id  # noqa: E402
from repository import InvoiceNotFound  # noqa: E402
from view_cache import ViewCache  # noqa: E402


class FakeInvoiceRepository:
  """Dict-backed repository recording every statement it is asked to run."""

  def __init__(self, fail: bool = False):
    self.rows: Dict[str, Invoice] = {}
    self.calls: List[tuple] = []
    self.fail = fail

  def _check(self) -> None:
    if self.fail:
      raise OperationalError("INSERT", {}, Exception("connection refused"))

  def insert(self, customer_id, amount, status, date):
    self.calls.append(("insert", customer_id, amount, status, date))
    self._check()
    inv = Invoice(id=new_invoice_id(), customer_id=customer_id, amount=amount, status=status, date=date)
    self.rows[inv.id] = inv
    return inv.id

  def update(self, invoice_id, customer_id, amount, status):
    self.calls.append(("update", invoice_id, customer_id, amount, status))
    self._check()
    if invoice_id not in self.rows:
      raise InvoiceNotFound(invoice_id)
    inv = self.rows[invoice_id]
    inv.customer_id, inv.amount, inv.status = customer_id, amount, status

  def delete(self, invoice_id):
    self.calls.append(("delete", invoice_id))
    self._check()
    self.rows.pop(invoice_id, None)

  def list(self):
    return list(self.rows.values())


@pytest.fixture
def repo():
  return FakeInvoiceRepository()


@pytest.fixture
def failing_repo():
  return FakeInvoiceRepository(fail=True)


@pytest.fixture
def cache():
  return ViewCache()
