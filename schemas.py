# schemas.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from models import InvoiceStatus

FieldErrors = Dict[str, List[str]]

# One message per field, whatever rule was violated
FIELD_MESSAGES = {
  "customerId": "Please select a customer.",
  "amount": "Please enter an amount greater than $0.",
  "status": "Please select an invoice status.",
}

FORM_FIELDS = ("customerId", "amount", "status")

# invoices.amount is a 32-bit integer column of cents
MAX_AMOUNT_CENTS = 2**31 - 1
MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100


def to_cents(amount: Decimal) -> int:
  return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class InvoiceForm(BaseModel):
  """Fields accepted from the create and edit invoice forms."""

  model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

  customer_id: str = Field(alias="customerId", min_length=1)
  amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
  status: InvoiceStatus

  @field_validator("amount")
  @classmethod
  def _at_least_one_cent(cls, v: Decimal) -> Decimal:
    if to_cents(v) < 1:
      raise ValueError("amount rounds to zero cents")
    return v

  @property
  def amount_in_cents(self) -> int:
    return to_cents(self.amount)

  @classmethod
  def parse_form(cls, form: Mapping[str, object]) -> "InvoiceForm":
    """Strict parse; raises ``ValidationError`` on bad input."""
    return cls.model_validate({k: form.get(k) for k in FORM_FIELDS})


class State(BaseModel):
  errors: Optional[FieldErrors] = None
  message: Optional[str] = None


def flatten_errors(exc: ValidationError) -> FieldErrors:
  errors: FieldErrors = {}
  for err in exc.errors():
    field = str(err["loc"][0]) if err["loc"] else "form"
    msg = FIELD_MESSAGES.get(field, err["msg"])
    bucket = errors.setdefault(field, [])
    if msg not in bucket:
      bucket.append(msg)
  return errors


def validate_invoice_form(form: Mapping[str, object]) -> Union[InvoiceForm, FieldErrors]:
  try:
    return InvoiceForm.parse_form(form)
  except ValidationError as exc:
    return flatten_errors(exc)
