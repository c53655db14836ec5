"""FastAPI application for the ingestion control surface.

Download failures (fetch, split, staging) map to 400 ``download_failed``.
Commit failures map to 500 ``datalake_move_failed`` because the book is
staged locally but not yet durable.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.models import (
    BookListResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    IngestResponse,
    StatusResponse,
)
from core.book_ids import parse_book_id
from core.errors import BooklakeInvalidIdError
from core.logging_config import get_logger
from store.booklake_client import BooklakeClient

_LOGGER = get_logger(__name__)


class ApiError(Exception):
    """Error rendered as a JSON error envelope."""

    def __init__(self, status_code: int, code: str, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


def create_app(client: BooklakeClient | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        client: Optional SDK client, built from environment when absent.

    Returns:
        Configured FastAPI app.
    """
    booklake = client or BooklakeClient()
    app = FastAPI(title="booklake ingestion API")
    _register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(backend=booklake.backend_name)

    @app.post("/ingest/{book_id}", response_model=IngestResponse)
    def ingest_book(book_id: str) -> IngestResponse:
        parsed_id = parse_book_id(book_id)
        _LOGGER.info("ingest_requested", book_id=parsed_id)
        timestamp = datetime.now()
        outcome = booklake.ingest(parsed_id, timestamp)
        if outcome.commit_failed:
            raise ApiError(500, "datalake_move_failed", "Failed to move files to datalake")
        if outcome.failed:
            raise ApiError(400, "download_failed", "Download failed or invalid book")
        receipt = booklake.receipt_for(parsed_id, timestamp)
        return IngestResponse(
            book_id=receipt.book_id,
            path=receipt.path,
            date=receipt.date,
            hour=receipt.hour,
            backend=booklake.backend_name,
        )

    @app.get("/ingest/status/{book_id}", response_model=StatusResponse)
    def book_status(book_id: str) -> StatusResponse:
        parsed_id = parse_book_id(book_id)
        available = booklake.exists(parsed_id)
        return StatusResponse(
            book_id=parsed_id,
            status="available" if available else "not_found",
            backend=booklake.backend_name,
        )

    @app.get("/ingest/list", response_model=BookListResponse)
    def list_books() -> BookListResponse:
        books = booklake.list_books()
        return BookListResponse(count=len(books), books=books, backend=booklake.backend_name)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, error: ApiError) -> JSONResponse:
        return _error_response(error.status_code, error.code, error.message)

    @app.exception_handler(BooklakeInvalidIdError)
    async def handle_invalid_id(request: Request, error: BooklakeInvalidIdError) -> JSONResponse:
        return _error_response(400, "invalid_book_id", str(error))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, error: Exception) -> JSONResponse:
        _LOGGER.error("request_failed", path=request.url.path, reason=str(error))
        return _error_response(500, "internal_error", str(error))


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=payload.model_dump())
