from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Sequence

import pandas as pd

from ...domain.errors import UploadNotFoundError
from ...types import SummaryDict
from ..aggregate.summary import ValidationSummary
from ..validation.cells import CellValue
from ..validation.rows import RowResult


@dataclass(frozen=True)
class StoredUpload:
    id: str
    filename: str
    total_rows: int
    valid_rows: int
    duplicate_rows: int
    error_rows: int
    column_names: list[str]
    upload_status: str
    validation_summary: SummaryDict
    created_at: datetime


@dataclass(frozen=True)
class StoredRow:
    upload_id: str
    row_data: dict[str, CellValue]
    original_row_number: int
    is_duplicate: bool
    validation_errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UploadPage:
    rows: list[StoredRow]
    total: int


def _matches(row: StoredRow, term: str) -> bool:
    return any(term in str(v).lower() for v in row.row_data.values())


class UploadStore:
    """In-process store for validated uploads and their rows."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger
        self._uploads: dict[str, StoredUpload] = {}
        self._rows: dict[str, list[StoredRow]] = {}

    def store_upload(
        self,
        filename: str,
        results: Sequence[RowResult],
        summary: ValidationSummary,
    ) -> str:
        upload_id = uuid.uuid4().hex
        self._uploads[upload_id] = StoredUpload(
            id=upload_id,
            filename=filename,
            total_rows=summary.total_rows,
            valid_rows=summary.valid_rows,
            duplicate_rows=summary.duplicate_rows,
            error_rows=summary.error_rows,
            column_names=list(summary.column_types),
            upload_status="completed",
            validation_summary=summary.to_dict(),
            created_at=datetime.now(timezone.utc),
        )
        self._rows[upload_id] = [
            StoredRow(
                upload_id=upload_id,
                row_data=dict(r.data),
                original_row_number=r.row_number,
                is_duplicate=r.is_duplicate,
                validation_errors=list(r.errors),
            )
            for r in results
        ]
        self.logger.info(
            "Stored upload",
            extra={"upload_id": upload_id, "upload_filename": filename, "rows": len(results)},
        )
        return upload_id

    def get_upload(self, upload_id: str) -> StoredUpload:
        try:
            return self._uploads[upload_id]
        except KeyError:
            raise UploadNotFoundError(upload_id) from None

    def get_uploads(self) -> list[StoredUpload]:
        """All uploads, newest first."""
        return sorted(self._uploads.values(), key=lambda u: u.created_at, reverse=True)

    def _unique_rows(self, upload_id: str) -> list[StoredRow]:
        rows = self._rows.get(upload_id, [])
        return sorted(
            (r for r in rows if not r.is_duplicate), key=lambda r: r.original_row_number
        )

    def get_upload_data(self, upload_id: str, page: int = 1, limit: int = 10) -> UploadPage:
        """One page of non-duplicate rows ordered by original row number (pages are 1-based)."""
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive (page={page}, limit={limit})")
        self.get_upload(upload_id)
        rows = self._unique_rows(upload_id)
        offset = (page - 1) * limit
        return UploadPage(rows=rows[offset : offset + limit], total=len(rows))

    def search_data(
        self, query: str, upload_id: Optional[str] = None, limit: int = 100
    ) -> list[StoredRow]:
        term = query.strip().lower()
        if not term:
            return []
        ids = [upload_id] if upload_id is not None else list(self._uploads)
        hits: list[StoredRow] = []
        for uid in ids:
            hits.extend(r for r in self._unique_rows(uid) if _matches(r, term))
        self.logger.info(
            "Search completed", extra={"query": query, "hits": len(hits), "upload_id": upload_id}
        )
        return hits[:limit]

    def to_frame(self, upload_id: str) -> pd.DataFrame:
        """Non-duplicate rows of one upload as a DataFrame indexed by row number."""
        upload = self.get_upload(upload_id)
        rows = self._unique_rows(upload_id)
        df = pd.DataFrame(
            [r.row_data for r in rows],
            columns=upload.column_names,
            index=pd.Index([r.original_row_number for r in rows], name="row_number"),
        )
        return df
