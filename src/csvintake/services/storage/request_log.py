from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, TypeVar
from urllib.parse import parse_qsl, quote

from ..aggregate.summary import ValidationSummary
from ..validation.rows import RowResult
from .upload_store import StoredRow, StoredUpload, UploadPage, UploadStore


T = TypeVar("T")


@dataclass(frozen=True)
class RequestLogEntry:
    method: str
    path: str
    query_params: dict[str, str]
    response_status: int
    response_time_ms: int
    error_message: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RequestLog:
    """Fire-and-forget log of API calls.

    A failing sink never makes record() raise: the failure is reported on a
    side channel (a warning plus the optional on_failure callback) and the
    caller's result is unaffected.
    """

    def __init__(
        self,
        logger: logging.Logger,
        sink: Optional[Callable[[RequestLogEntry], None]] = None,
        on_failure: Optional[Callable[[RequestLogEntry, Exception], None]] = None,
    ) -> None:
        self.logger = logger
        self._entries: list[RequestLogEntry] = []
        self._sink = sink or self._entries.append
        self._on_failure = on_failure
        self.enabled = True

    def record(
        self,
        method: str,
        path: str,
        status: int,
        elapsed_ms: int,
        error: str = "",
    ) -> None:
        if not self.enabled:
            return
        query = dict(parse_qsl(path.split("?", 1)[1])) if "?" in path else {}
        entry = RequestLogEntry(
            method=method,
            path=path,
            query_params=query,
            response_status=status,
            response_time_ms=elapsed_ms,
            error_message=error,
        )
        try:
            self._sink(entry)
        except Exception as exc:
            self.logger.warning(
                "Failed to record API call", extra={"method": method, "path": path, "error": str(exc)}
            )
            if self._on_failure is not None:
                self._on_failure(entry, exc)

    def entries(self, page: int = 1, limit: int = 50) -> tuple[list[RequestLogEntry], int]:
        """Recorded entries, newest first, with the total count."""
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive (page={page}, limit={limit})")
        ordered = list(reversed(self._entries))
        offset = (page - 1) * limit
        return ordered[offset : offset + limit], len(ordered)

    def clear(self) -> None:
        """Delete all entries and stop recording further calls."""
        self._entries.clear()
        self.enabled = False
        self.logger.info("API log cleared; recording disabled")


class UploadApi:
    """Upload store front that times every call and records it in the request log."""

    def __init__(
        self,
        store: UploadStore,
        request_log: RequestLog,
        page_size: int = 10,
        search_limit: int = 100,
    ) -> None:
        self.store = store
        self.request_log = request_log
        # Used when a call does not pass its own limit
        self.page_size = page_size
        self.search_limit = search_limit

    def _call(self, method: str, path: str, ok_status: int, fn: Callable[[], T]) -> T:
        start = time.perf_counter()
        try:
            result = fn()
        except Exception as exc:
            self.request_log.record(method, path, 0, _elapsed_ms(start), str(exc))
            raise
        self.request_log.record(method, path, ok_status, _elapsed_ms(start))
        return result

    def store_upload(
        self, filename: str, results: Sequence[RowResult], summary: ValidationSummary
    ) -> str:
        return self._call(
            "POST",
            "/api/uploads",
            201,
            lambda: self.store.store_upload(filename, results, summary),
        )

    def get_uploads(self) -> list[StoredUpload]:
        return self._call("GET", "/api/uploads", 200, self.store.get_uploads)

    def get_upload_data(
        self, upload_id: str, page: int = 1, limit: Optional[int] = None
    ) -> UploadPage:
        if limit is None:
            limit = self.page_size
        path = f"/api/uploads/{upload_id}/data?page={page}&limit={limit}"
        return self._call(
            "GET", path, 200, lambda: self.store.get_upload_data(upload_id, page, limit)
        )

    def search_data(
        self, query: str, upload_id: Optional[str] = None, limit: Optional[int] = None
    ) -> list[StoredRow]:
        if limit is None:
            limit = self.search_limit
        path = f"/api/search?q={quote(query)}"
        if upload_id:
            path += f"&uploadId={upload_id}"
        return self._call(
            "GET", path, 200, lambda: self.store.search_data(query, upload_id, limit)
        )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
