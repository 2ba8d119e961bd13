# ABOUTME: Tests for logger helpers: operation ids, API call decorator and context managers
# ABOUTME: Verifies decorated upstream calls pass results and exceptions through unchanged

import pytest

from crewbase.utils.logging import log_api_call, with_request_context, with_source_context
from crewbase.utils.logging.utils import generate_operation_id, get_logger


class TestOperationId:
    def test_ids_are_short_and_unique(self):
        ids = {generate_operation_id() for _ in range(50)}

        assert len(ids) == 50
        assert all(len(operation_id) == 8 for operation_id in ids)


class TestLogApiCall:
    @pytest.mark.asyncio
    async def test_result_is_returned(self):
        @log_api_call("test_api")
        async def fetch(url):
            return {"url": url}

        assert await fetch("https://example.test/a") == {"url": "https://example.test/a"}

    @pytest.mark.asyncio
    async def test_exception_is_reraised(self):
        @log_api_call("test_api")
        async def fetch(url):
            raise ConnectionError("down")

        with pytest.raises(ConnectionError, match="down"):
            await fetch("https://example.test/a")

    def test_wrapper_keeps_name(self):
        @log_api_call("test_api")
        async def fetch_playlist():
            return None

        assert fetch_playlist.__name__ == "fetch_playlist"


class TestContexts:
    def test_source_context_binds_source(self):
        with with_source_context("videos", page=2) as log:
            assert log._context["source"] == "videos"
            assert log._context["page"] == 2
            assert len(log._context["operation_id"]) == 8

    def test_request_context_does_not_swallow_errors(self):
        with pytest.raises(RuntimeError):
            with with_request_context("roles"):
                raise RuntimeError("boom")

    def test_get_logger_defaults_to_caller_module(self):
        assert get_logger() is not None
