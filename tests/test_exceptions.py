"""Tests for luma.core.exceptions: handlers and error classes."""

import inspect
import json
from unittest.mock import MagicMock

from fastapi import HTTPException

from luma.core import exceptions
from luma.core.exceptions import (
    AppError,
    AuthenticationError,
    InvalidCacheKeyError,
    StorageError,
    ValidationError,
    app_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
)


def _make_request() -> MagicMock:
    req = MagicMock()
    req.url = "http://test/path"
    return req


# =============================================================================
# Error classes
# =============================================================================

class TestAppError:

    def test_carries_status_and_message(self):
        err = AppError("boom", status_code=418)
        assert err.status_code == 418
        assert err.message == "boom"

    def test_default_status_is_500(self):
        assert AppError("x").status_code == 500

    def test_subclass_status_codes(self):
        assert AuthenticationError().status_code == 401
        assert ValidationError("bad").status_code == 422
        assert StorageError("get").status_code == 503

    def test_only_raised_error_classes_defined(self):
        defined = {
            name for name, obj in inspect.getmembers(exceptions, inspect.isclass)
            if issubclass(obj, AppError) and obj.__module__ == exceptions.__name__
        }
        assert defined == {
            "AppError", "AuthenticationError", "ValidationError",
            "InvalidCacheKeyError", "StorageError",
        }

    def test_invalid_cache_key_is_validation_error(self):
        err = InvalidCacheKeyError("post", "discriminator must be non-empty")
        assert isinstance(err, ValidationError)
        assert err.details == {"resource": "post"}
        assert "post" in err.message

    def test_storage_error_names_operation(self):
        err = StorageError("keys")
        assert err.details == {"operation": "keys"}
        assert "(keys)" in err.message


# =============================================================================
# Handlers
# =============================================================================

class TestHandlers:

    async def test_app_error_body(self):
        resp = await app_exception_handler(_make_request(), StorageError("ping"))
        body = json.loads(resp.body)

        assert resp.status_code == 503
        assert body["error"]["type"] == "StorageError"
        assert body["error"]["details"] == {"operation": "ping"}

    async def test_http_exception_body(self):
        resp = await http_exception_handler(
            _make_request(), HTTPException(status_code=404, detail="Not Found")
        )
        assert resp.status_code == 404
        assert json.loads(resp.body) == {"error": {"message": "Not Found"}}

    async def test_unhandled_hides_details(self):
        resp = await unhandled_exception_handler(_make_request(), RuntimeError("secret"))
        body = json.loads(resp.body)

        assert resp.status_code == 500
        assert "secret" not in body["error"]["message"]
