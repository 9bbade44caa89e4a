"""
Receipt Processor HTTP API

This module provides a FastAPI application that accepts purchase receipts,
stores them, and reports the loyalty points each stored receipt earns.

"""

import logging
from contextlib import asynccontextmanager

import logfire
import uvicorn
from dotenv import load_dotenv


load_dotenv()
from fastapi import Depends, FastAPI, Request
from fastapi.responses import PlainTextResponse

from receipt_processor.config import get_app_settings
from receipt_processor.db import create_db_and_tables, create_engine_from_settings
from receipt_processor.models import PointsResponse, ReceiptCreated
from receipt_processor.operations import (
    InvalidReceiptPayload,
    ReceiptNotFound,
    get_receipt_points,
    submit_receipt,
)
from receipt_processor.store import ReceiptStore, SQLReceiptStore, StorageError


# Configure logging
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for the receipt store.

    Creates the database engine and the `receipts` table on startup, exposes a
    `SQLReceiptStore` on `app.state.store`, and disposes of the engine's
    connection pool on shutdown.

    Args:
        app (FastAPI): The FastAPI application instance.

    Yields:
        None
    """
    app_settings = get_app_settings()
    engine = create_engine_from_settings(app_settings)
    await create_db_and_tables(engine)
    logger.info("Connected to the receipts database")
    app.state.store = SQLReceiptStore(
        engine, timeout=app_settings.storage_timeout_seconds
    )
    yield
    await engine.dispose()


app = FastAPI(title="Receipt Processor", lifespan=lifespan)


if not get_app_settings().disable_logfire:
    logfire.configure(
        service_name="receipt-processor", send_to_logfire="if-token-present"
    )
    logfire.instrument_fastapi(app)


def get_receipt_store(request: Request) -> ReceiptStore:
    """Returns the receipt store created for the running application."""
    return request.app.state.store


@app.exception_handler(InvalidReceiptPayload)
async def invalid_receipt_handler(request: Request, exc: InvalidReceiptPayload):
    logger.warning(f"Rejected receipt submission: {exc}")
    return PlainTextResponse(str(exc), status_code=400)


@app.exception_handler(ReceiptNotFound)
async def receipt_not_found_handler(request: Request, exc: ReceiptNotFound):
    return PlainTextResponse(str(exc), status_code=404)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    return PlainTextResponse(str(exc), status_code=500)


@app.post("/api/receipts", response_model=ReceiptCreated)
async def process_receipt(
    request: Request, store: ReceiptStore = Depends(get_receipt_store)
):
    """
    Stores a submitted receipt and returns its generated identifier.

    The body is read and decoded here rather than through a typed parameter, so
    that a malformed receipt is answered with a 400 and the decoding error text.

    Args:
        request (Request): FastAPI request object containing the receipt JSON.
        store (ReceiptStore): The store the receipt is persisted to.

    Returns:
        ReceiptCreated: The identifier assigned to the receipt.
    """
    body = await request.body()
    receipt_id = await submit_receipt(store, body)
    return ReceiptCreated(id=receipt_id)


@app.get("/api/receipts/{receipt_id}", response_model=PointsResponse)
async def receipt_points(
    receipt_id: str, store: ReceiptStore = Depends(get_receipt_store)
):
    """Returns the points awarded for a stored receipt."""
    points = await get_receipt_points(store, receipt_id)
    return PointsResponse(points=points)


@app.get("/healthz")
async def health_check():
    """Health check endpoint to verify service is running."""
    return {"status": "healthy"}


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    app_settings = get_app_settings()
    uvicorn.run(app, host=app_settings.host, port=app_settings.port)
