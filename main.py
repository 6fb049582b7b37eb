import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from actions import InvoiceDeleteError
from db import init_db
from invoice_route import router as invoice_router

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
CORS_ORIGINS = [
  x.strip()
  for x in os.getenv("CORS_ORIGINS", "http://127.0.0.1:3000,http://localhost:3000").split(",")
  if x.strip()
]

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("invoices")


@asynccontextmanager
async def lifespan(_app: FastAPI):
  init_db()
  yield


def create_app() -> FastAPI:
  app = FastAPI(title="Invoices Backend", version="1.0.0", lifespan=lifespan)
  app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
  )

  @app.exception_handler(InvoiceDeleteError)
  async def invoice_delete_error(request: Request, exc: InvoiceDeleteError):
    logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=500, content={"detail": exc.message})

  @app.get("/health")
  def health():
    return {"ok": True}

  app.include_router(invoice_router)
  return app


app = create_app()
