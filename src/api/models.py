"""Response models for the HTTP control surface."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    backend: str


class IngestResponse(BaseModel):
    """Payload returned after a successful ingestion."""

    book_id: int
    status: Literal["downloaded"] = "downloaded"
    path: str
    date: str
    hour: str
    backend: str


class StatusResponse(BaseModel):
    book_id: int
    status: Literal["available", "not_found"]
    backend: str


class BookListResponse(BaseModel):
    count: int
    books: list[int]
    backend: str


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
