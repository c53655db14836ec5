"""Shared test doubles for HTTP and S3 collaborators."""

from __future__ import annotations

from typing import Any, Iterator

import requests
from botocore.exceptions import ClientError


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.content = text.encode("utf-8")


class FakeSession:
    """Session returning canned responses keyed by URL."""

    def __init__(
        self,
        responses: dict[str, FakeResponse] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._responses = responses or {}
        self._error = error
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self._error is not None:
            raise self._error
        return self._responses.get(url, FakeResponse(404))


def archive_session(documents: dict[int, str], base_url: str) -> FakeSession:
    """Build a session serving ``documents`` at archive URLs."""
    responses = {
        f"{base_url}/{book_id}/pg{book_id}.txt": FakeResponse(200, text)
        for book_id, text in documents.items()
    }
    return FakeSession(responses)


def timeout_session() -> FakeSession:
    return FakeSession(error=requests.Timeout("read timed out"))


def client_error(operation: str, code: str = "InternalError") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "simulated"}}, operation)


class FakeS3Client:
    """In-memory S3 client covering the calls used by the datalake adapter."""

    def __init__(self, fail_put_on_call: int | None = None, fail_list_on_page: int | None = None):
        self.objects: dict[str, dict[str, Any]] = {}
        self.buckets: set[str] = set()
        self.put_calls = 0
        self.list_page_calls = 0
        self._fail_put_on_call = fail_put_on_call
        self._fail_list_on_page = fail_list_on_page

    def put_object(self, Bucket: str, Key: str, Body: Any, ContentType: str) -> dict[str, Any]:
        self.put_calls += 1
        if self.put_calls == self._fail_put_on_call:
            raise client_error("PutObject")
        payload = Body.read() if hasattr(Body, "read") else Body
        self.objects[Key] = {"Bucket": Bucket, "Body": payload, "ContentType": ContentType}
        return {}

    def head_bucket(self, Bucket: str) -> dict[str, Any]:
        if Bucket not in self.buckets:
            raise client_error("HeadBucket", code="404")
        return {}

    def create_bucket(self, Bucket: str) -> dict[str, Any]:
        self.buckets.add(Bucket)
        return {}

    def get_paginator(self, operation_name: str) -> "FakePaginator":
        assert operation_name == "list_objects_v2"
        return FakePaginator(self)


class FakePaginator:
    def __init__(self, client: FakeS3Client) -> None:
        self._client = client

    def paginate(
        self,
        Bucket: str,
        Prefix: str,
        PaginationConfig: dict[str, int] | None = None,
    ) -> Iterator[dict[str, Any]]:
        page_size = (PaginationConfig or {}).get("PageSize", 1000)
        keys = sorted(key for key in self._client.objects if key.startswith(Prefix))
        for start in range(0, max(len(keys), 1), page_size):
            self._client.list_page_calls += 1
            if self._client.list_page_calls == self._client._fail_list_on_page:
                raise client_error("ListObjectsV2")
            page_keys = keys[start : start + page_size]
            yield {
                "Contents": [{"Key": key} for key in page_keys],
                "IsTruncated": start + page_size < len(keys),
            }
