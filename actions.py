# actions.py
import datetime as dt
import logging
import os
from typing import Callable, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from repository import InvoiceNotFound, InvoiceRepository
from schemas import InvoiceForm, State, validate_invoice_form
from view_cache import INVOICES_PATH, ViewCache

logger = logging.getLogger("invoices.actions")

CREATE_MISSING_FIELDS = "Missing Fields. Failed to Create Invoice."
UPDATE_MISSING_FIELDS = "Missing Fields. Failed to Update Invoice."
CREATE_DB_ERROR = "Database Error: Failed to Create Invoice."
UPDATE_DB_ERROR = "Database Error: Failed to Update Invoice."
DELETE_DB_ERROR = "Database Error: Failed to Delete Invoice."

FormData = Mapping[str, object]


class InvoiceDeleteError(RuntimeError):
  """Raised by ``delete_invoice`` while invoice deletion is switched off."""

  def __init__(self, message: str = "Failed to Delete Invoice"):
    super().__init__(message)
    self.message = message


class ActionResult(BaseModel):
  state: Optional[State] = None
  redirect_to: Optional[str] = None
  invoice_id: Optional[str] = None

  @property
  def ok(self) -> bool:
    return self.state is None


def utc_today() -> dt.date:
  return dt.datetime.now(dt.timezone.utc).date()


def deletes_disabled_from_env() -> bool:
  return os.getenv("FAIL_INVOICE_DELETES", "true").strip().lower() in ("1", "true", "yes", "on")


class InvoiceActions:
  """Form actions for invoices: validate, persist, then revalidate the list view.

  Navigation is left to the caller; a successful create or update names the
  path to go to in ``ActionResult.redirect_to``.
  """

  def __init__(
    self,
    repository: InvoiceRepository,
    cache: ViewCache,
    today: Callable[[], dt.date] = utc_today,
    fail_deletes: Optional[bool] = None,
  ):
    self.repository = repository
    self.cache = cache
    self.today = today
    self.fail_deletes = deletes_disabled_from_env() if fail_deletes is None else fail_deletes

  def create_invoice(self, previous_state: Optional[State], form: FormData) -> ActionResult:
    validated = validate_invoice_form(form)
    if not isinstance(validated, InvoiceForm):
      logger.info("create_invoice rejected: %s", sorted(validated))
      return ActionResult(state=State(errors=validated, message=CREATE_MISSING_FIELDS))

    date = self.today()
    try:
      invoice_id = self.repository.insert(
        validated.customer_id, validated.amount_in_cents, validated.status, date
      )
    except SQLAlchemyError:
      logger.exception("create_invoice failed for customer %s", validated.customer_id)
      return ActionResult(state=State(message=CREATE_DB_ERROR))

    logger.info("created invoice %s", invoice_id)
    self.cache.revalidate_path(INVOICES_PATH)
    return ActionResult(redirect_to=INVOICES_PATH, invoice_id=invoice_id)

  def update_invoice(self, invoice_id: str, form: FormData) -> ActionResult:
    validated = validate_invoice_form(form)
    if not isinstance(validated, InvoiceForm):
      logger.info("update_invoice %s rejected: %s", invoice_id, sorted(validated))
      return ActionResult(state=State(errors=validated, message=UPDATE_MISSING_FIELDS))

    try:
      self.repository.update(
        invoice_id, validated.customer_id, validated.amount_in_cents, validated.status
      )
    except InvoiceNotFound:
      logger.warning("update_invoice: no invoice %s", invoice_id)
      return ActionResult(state=State(message=UPDATE_DB_ERROR))
    except SQLAlchemyError:
      logger.exception("update_invoice failed for %s", invoice_id)
      return ActionResult(state=State(message=UPDATE_DB_ERROR))

    logger.info("updated invoice %s", invoice_id)
    self.cache.revalidate_path(INVOICES_PATH)
    return ActionResult(redirect_to=INVOICES_PATH, invoice_id=invoice_id)

  def delete_invoice(self, invoice_id: str) -> ActionResult:
    if self.fail_deletes:
      raise InvoiceDeleteError()

    try:
      self.repository.delete(invoice_id)
    except SQLAlchemyError:
      logger.exception("delete_invoice failed for %s", invoice_id)
      return ActionResult(state=State(message=DELETE_DB_ERROR))

    logger.info("deleted invoice %s", invoice_id)
    self.cache.revalidate_path(INVOICES_PATH)
    return ActionResult(invoice_id=invoice_id)
