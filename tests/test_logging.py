"""Test structured logging and error-to-response mapping."""
import json
import logging

from core.errors import (
    INTERNAL_ERROR_MESSAGE,
    BookNotFoundError,
    BookValidationError,
    StorageError,
)
from core.observability.logging_setup import JSONFormatter, request_id_var, setup_logging


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("bookstore.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record("hello")))
    assert out["level"] == "INFO"
    assert out["logger"] == "bookstore.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_json_formatter_extra_fields():
    record = _record("deleted", book_id=7, error_code="BOOK_NOT_FOUND", request_id="r1")
    out = json.loads(JSONFormatter().format(record))
    assert out["book_id"] == 7
    assert out["error_code"] == "BOOK_NOT_FOUND"
    assert out["request_id"] == "r1"
    assert "path" not in out


def test_setup_logging_replaces_own_handler():
    root = logging.getLogger()
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    ours = [h for h in root.handlers if getattr(h, "_bookstore_handler", False)]
    assert len(ours) == 1
    assert root.level == logging.WARNING


def test_request_id_filter_stamps_records():
    handler = setup_logging("INFO", "json")
    token = request_id_var.set("req-42")
    try:
        record = _record("inside request")
        handler.filter(record)
        assert record.request_id == "req-42"
    finally:
        request_id_var.reset(token)


def test_error_responses():
    assert BookValidationError().to_response() == {"message": "Title and author are required"}
    assert BookValidationError().http_status == 400
    assert BookNotFoundError("5").to_response() == {"message": "Book not found"}
    assert BookNotFoundError("5").http_status == 404


def test_storage_error_hides_driver_detail():
    err = StorageError("insert", "E11000 duplicate key error")
    assert err.http_status == 500
    assert err.to_response() == {"message": INTERNAL_ERROR_MESSAGE}
    assert INTERNAL_ERROR_MESSAGE == "Internal server error"
    assert err.detail == "E11000 duplicate key error"


def test_not_found_log_carries_book_id(client, caplog):
    with caplog.at_level(logging.INFO, logger="api.error_handlers"):
        resp = client.get("/books/77")
    assert resp.status_code == 404
    records = [r for r in caplog.records if r.name == "api.error_handlers"]
    assert records[-1].book_id == "77"
    assert records[-1].error_code == "BOOK_NOT_FOUND"
