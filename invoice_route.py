# invoice_route.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session

from actions import ActionResult, InvoiceActions
from db import get_session
from repository import SQLInvoiceRepository
from view_cache import INVOICES_PATH, ViewCache, get_view_cache

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])

def get_actions(
  session: Session = Depends(get_session),
  cache: ViewCache = Depends(get_view_cache),
) -> InvoiceActions:
  return InvoiceActions(SQLInvoiceRepository(session), cache)

def _form(customer_id: Optional[str], amount: Optional[str], status: Optional[str]) -> Dict[str, Any]:
  return {"customerId": customer_id, "amount": amount, "status": status}

def _respond(result: ActionResult, error_status: int):
  if result.state is not None:
    return JSONResponse(status_code=error_status, content=result.state.model_dump())
  if result.redirect_to:
    return RedirectResponse(result.redirect_to, status_code=303)
  return {"ok": True, "invoice_id": result.invoice_id}

def _error_status(result: ActionResult) -> int:
  # field errors are the caller's fault, anything else is ours
  return 422 if result.state is not None and result.state.errors else 500

@router.get("")
def list_invoices(
  session: Session = Depends(get_session),
  cache: ViewCache = Depends(get_view_cache),
) -> List[Dict[str, Any]]:
  rows, generation = cache.get(INVOICES_PATH)
  if rows is None:
    rows = [inv.model_dump(mode="json") for inv in SQLInvoiceRepository(session).list()]
    # skipped if a mutation revalidated the path while we were reading
    cache.put(INVOICES_PATH, rows, generation)
  return rows

@router.post("/create")
def create_invoice(
  customer_id: Optional[str] = Form(None, alias="customerId"),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  actions: InvoiceActions = Depends(get_actions),
):
  result = actions.create_invoice(None, _form(customer_id, amount, status))
  return _respond(result, _error_status(result))

@router.post("/{invoice_id}/edit")
def update_invoice(
  invoice_id: str,
  customer_id: Optional[str] = Form(None, alias="customerId"),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  actions: InvoiceActions = Depends(get_actions),
):
  result = actions.update_invoice(invoice_id, _form(customer_id, amount, status))
  return _respond(result, _error_status(result))

@router.post("/{invoice_id}/delete")
def delete_invoice(invoice_id: str, actions: InvoiceActions = Depends(get_actions)):
  result = actions.delete_invoice(invoice_id)
  return _respond(result, 500)
