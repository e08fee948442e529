from __future__ import annotations

import logging

import pytest

from csvintake.domain.errors import UploadNotFoundError
from csvintake.services.storage.upload_store import UploadStore
from csvintake.services.validate_service import validate_text


CSV = """name,city,price
Ann,Oslo,1
Bob,Rome,2
Ann,Oslo,1
Cy,Oslo,3
Dee,Lima,4
"""


def _store() -> UploadStore:
    return UploadStore(logging.getLogger("test.store"))


def test_store_and_read_back_metadata() -> None:
    store = _store()
    out = validate_text(CSV)
    uid = store.store_upload("people.csv", out.results, out.summary)
    up = store.get_upload(uid)
    assert up.filename == "people.csv"
    assert (up.total_rows, up.valid_rows, up.duplicate_rows, up.error_rows) == (5, 4, 1, 0)
    assert up.column_names == ["name", "city", "price"]
    assert up.upload_status == "completed"
    assert up.validation_summary["duplicateRows"] == 1


def test_upload_data_excludes_duplicates_and_paginates() -> None:
    store = _store()
    out = validate_text(CSV)
    uid = store.store_upload("people.csv", out.results, out.summary)

    page1 = store.get_upload_data(uid, page=1, limit=3)
    assert page1.total == 4
    assert [r.original_row_number for r in page1.rows] == [1, 2, 4]

    page2 = store.get_upload_data(uid, page=2, limit=3)
    assert [r.row_data["name"] for r in page2.rows] == ["Dee"]

    assert store.get_upload_data(uid, page=5, limit=3).rows == []


def test_upload_data_errors() -> None:
    store = _store()
    with pytest.raises(UploadNotFoundError):
        store.get_upload_data("missing")
    out = validate_text(CSV)
    uid = store.store_upload("people.csv", out.results, out.summary)
    with pytest.raises(ValueError):
        store.get_upload_data(uid, page=0)


def test_get_uploads_newest_first() -> None:
    store = _store()
    out = validate_text(CSV)
    first = store.store_upload("a.csv", out.results, out.summary)
    second = store.store_upload("b.csv", out.results, out.summary)
    ids = [u.id for u in store.get_uploads()]
    assert set(ids) == {first, second}
    assert ids[0] == second or store.get_upload(first).created_at == store.get_upload(second).created_at


def test_search_is_case_insensitive_and_scoped() -> None:
    store = _store()
    out = validate_text(CSV)
    uid = store.store_upload("a.csv", out.results, out.summary)
    other = validate_text("name,city\nZed,oslo\n")
    other_id = store.store_upload("b.csv", other.results, other.summary)

    hits = store.search_data("OSLO")
    assert {r.row_data["name"] for r in hits} == {"Ann", "Cy", "Zed"}
    scoped = store.search_data("oslo", upload_id=uid)
    assert {r.upload_id for r in scoped} == {uid}
    assert store.search_data("   ") == []
    assert len(store.search_data("o", limit=2)) == 2
    assert other_id != uid


def test_to_frame() -> None:
    store = _store()
    out = validate_text(CSV)
    uid = store.store_upload("a.csv", out.results, out.summary)
    df = store.to_frame(uid)
    assert list(df.columns) == ["name", "city", "price"]
    assert list(df.index) == [1, 2, 4, 5]
    assert df.loc[5, "price"] == 4.0
