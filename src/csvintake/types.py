from __future__ import annotations

from typing import TypedDict


class SummaryDict(TypedDict):
    totalRows: int
    validRows: int
    duplicateRows: int
    errorRows: int
    columnTypes: dict[str, str]
    validationErrors: list[str]


class NumericFieldStats(TypedDict):
    min: float
    max: float
    avg: float
    count: int


class CategoryCount(TypedDict):
    name: str
    value: int


class ManifestInputsEntry(TypedDict):
    path: str
    sha256: str
    upload_id: str
    summary: SummaryDict


class ManifestParameters(TypedDict):
    max_string_length: int
    max_errors: int
    page_size: int
    search_limit: int
    write_workbook: bool
    strict_fail: bool


class ManifestEnvironment(TypedDict):
    python: str
    platform: str
    pandas: str


class Manifest(TypedDict):
    pipeline_version: str
    started_at: str
    finished_at: str
    inputs: list[ManifestInputsEntry]
    parameters: ManifestParameters
    environment: ManifestEnvironment


class ConfigOverrides(TypedDict, total=False):
    pipeline_version: str
    max_string_length: int
    max_errors: int
    page_size: int
    search_limit: int
    write_workbook: bool
    strict_fail: bool


class YamlConfig(TypedDict, total=False):
    pipeline_version: str
    max_string_length: int
    max_errors: int
    page_size: int
    search_limit: int
    write_workbook: bool
    strict_fail: bool
