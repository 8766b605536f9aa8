"""
Bookshelf Backend - Middleware Tests
======================================

What:  Request id resolution and the access log written per request.
"""

import logging

import pytest

from bookshelf.middleware.logging import status_log_level
from bookshelf.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_client_token_kept(self):
        assert resolve_request_id("req-42.a_b") == "req-42.a_b"

    @pytest.mark.parametrize("value", [None, "", "has space", "x" * 65, "semi;colon"])
    def test_unusable_value_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8

    def test_generated_ids_differ(self):
        assert resolve_request_id(None) != resolve_request_id(None)


class TestStatusLogLevel:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (204, logging.INFO), (400, logging.WARNING),
         (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_by_status(self, status, level):
        assert status_log_level(status) == level


class TestAccessLog:
    """One line per book request, tagged with the request id."""

    @pytest.fixture(autouse=True)
    def _capture(self, caplog):
        caplog.set_level(logging.INFO, logger="bookshelf.access")

    @staticmethod
    def access_records(caplog):
        return [r for r in caplog.records if r.name == "bookshelf.access"]

    @pytest.mark.asyncio
    async def test_item_request_logs_book_id(self, test_client, fake_usecase, caplog):
        fake_usecase.seed(title="Dune")

        await test_client.get("/books/1", headers={"X-Request-ID": "rid-1"})

        (record,) = self.access_records(caplog)
        assert record.levelno == logging.INFO
        assert record.status == 200
        assert record.book_id == "1"
        assert record.request_id == "rid-1"
        assert "book=1" in record.getMessage()

    @pytest.mark.asyncio
    async def test_collection_request_has_no_book_id(self, test_client, caplog):
        await test_client.get("/books")

        (record,) = self.access_records(caplog)
        assert record.book_id is None
        assert record.path == "/books"

    @pytest.mark.asyncio
    async def test_not_found_logged_as_warning(self, test_client, caplog):
        await test_client.get("/books/99")

        (record,) = self.access_records(caplog)
        assert record.levelno == logging.WARNING
        assert record.status == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_logged_as_500(self, test_client, fake_usecase, caplog):
        fake_usecase.failure = RuntimeError("boom")

        await test_client.get("/books", headers={"X-Request-ID": "rid-err"})

        (record,) = self.access_records(caplog)
        assert record.levelno == logging.ERROR
        assert record.status == 500
        assert record.request_id == "rid-err"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/health", "/docs", "/openapi.json"])
    async def test_service_paths_not_logged(self, test_client, caplog, path):
        response = await test_client.get(path)

        assert response.status_code == 200
        assert self.access_records(caplog) == []
