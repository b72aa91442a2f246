"""
Tests for the record store and webhook sinks.
"""

import asyncio
import json

import httpx
import pytest

from brand_savings.errors import RecordStoreError, WebhookError
from brand_savings.sinks import (
    HttpWebhookSink,
    RecordStore,
    SupabaseRecordStore,
    WebhookSink,
)

RECORD = {"name": "Dana", "email": "dana@example.com", "monthly_spend": 30000}
PAYLOAD = {"name": "Dana", "email": "dana@example.com", "answers": {"matchType": "yes"}}


class TestSupabaseRecordStore:
    """Supabase inserts through a mocked client."""

    def test_satisfies_protocol(self, mock_supabase):
        assert isinstance(SupabaseRecordStore(lambda: mock_supabase), RecordStore)

    def test_inserts_into_collection(self, mock_supabase):
        store = SupabaseRecordStore(lambda: mock_supabase)
        asyncio.run(store.write("submissions", RECORD))

        mock_supabase.table.assert_called_once_with("submissions")
        args, _ = mock_supabase.table.return_value.insert.call_args
        assert args[0] == [RECORD]
        mock_supabase.table.return_value.execute.assert_called_once()

    def test_api_error_fails_closed(self, mock_supabase):
        mock_supabase.table.return_value.execute.side_effect = Exception("permission denied")
        store = SupabaseRecordStore(lambda: mock_supabase)

        with pytest.raises(RecordStoreError, match="permission denied"):
            asyncio.run(store.write("submissions", RECORD))

    def test_client_creation_error_fails_closed(self):
        def broken_factory():
            raise RuntimeError("missing SUPABASE_URL")

        store = SupabaseRecordStore(broken_factory)
        with pytest.raises(RecordStoreError):
            asyncio.run(store.write("submissions", RECORD))


class TestHttpWebhookSink:
    """Webhook calls through httpx.MockTransport."""

    def _sink(self, handler) -> HttpWebhookSink:
        return HttpWebhookSink(
            url="https://hooks.example.com/submit",
            token="secret-token",
            transport=httpx.MockTransport(handler),
        )

    def test_satisfies_protocol(self):
        assert isinstance(self._sink(lambda r: httpx.Response(200)), WebhookSink)

    def test_posts_json_with_bearer(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ignored": True})

        asyncio.run(self._sink(handler).notify(PAYLOAD))

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "https://hooks.example.com/submit"
        assert request.headers["Authorization"] == "Bearer secret-token"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == PAYLOAD

    def test_any_2xx_is_success(self):
        asyncio.run(self._sink(lambda r: httpx.Response(204)).notify(PAYLOAD))

    @pytest.mark.parametrize("status", [400, 401, 500, 502])
    def test_non_2xx_raises(self, status):
        with pytest.raises(WebhookError) as exc_info:
            asyncio.run(self._sink(lambda r: httpx.Response(status)).notify(PAYLOAD))
        assert exc_info.value.status_code == status

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(WebhookError, match="connection refused"):
            asyncio.run(self._sink(handler).notify(PAYLOAD))

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(WebhookError, match="timed out"):
            asyncio.run(self._sink(handler).notify(PAYLOAD))

    def test_malformed_url_raises(self):
        sink = HttpWebhookSink(
            url="https://exa mple.com/\x00hook",
            token="secret-token",
            transport=httpx.MockTransport(lambda r: httpx.Response(200)),
        )

        with pytest.raises(WebhookError, match="could not be sent") as exc_info:
            asyncio.run(sink.notify(PAYLOAD))
        assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
        assert exc_info.value.status_code is None

    def test_from_settings_uses_edge_function(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co/")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        monkeypatch.delenv("WEBHOOK_URL", raising=False)
        monkeypatch.delenv("WEBHOOK_TOKEN", raising=False)

        sink = HttpWebhookSink.from_settings()
        assert sink.url == "https://abc.supabase.co/functions/v1/zapier-webhook"
        assert sink.headers["Authorization"] == "Bearer anon"


class TestSupabaseClient:
    """Cached client construction."""

    def test_client_is_created_once(self, monkeypatch):
        from unittest.mock import MagicMock

        from brand_savings.db import client as db_client

        factory = MagicMock(return_value=MagicMock())
        monkeypatch.setattr(db_client, "create_client", factory)
        db_client.reset_client()
        try:
            first = db_client.get_client()
            second = db_client.get_client()
        finally:
            db_client.reset_client()

        assert first is second
        factory.assert_called_once()
        url, key = factory.call_args.args
        assert url.startswith("https://")
        assert key
