from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CsvIntakeError(Exception):
    """Base class for failures that abort a whole file."""


class EmptyInputError(CsvIntakeError):
    def __init__(self, message: str = "Empty CSV file") -> None:
        super().__init__(message)


class FileReadError(CsvIntakeError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read file '{path}': {reason}")
        self.path = path
        self.reason = reason


class UploadNotFoundError(CsvIntakeError):
    def __init__(self, upload_id: str) -> None:
        super().__init__(f"Upload not found: {upload_id}")
        self.upload_id = upload_id


class ErrorCategory(str, Enum):
    MISSING_VALUE = "MISSING_VALUE"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    FORMAT_VIOLATION = "FORMAT_VIOLATION"
    LENGTH_VIOLATION = "LENGTH_VIOLATION"
    DUPLICATE_ROW = "DUPLICATE_ROW"


@dataclass(frozen=True)
class ValidationIssue:
    category: ErrorCategory
    message: str
    row_number: int
    column: Optional[str] = None
