"""Tests for the Supabase REST channel and the SQL executor."""

import asyncio
import json

import httpx
import pytest

from chartgen.infrastructure.database.connection import ExecutionChannelError, SupabaseRestClient
from chartgen.services.sql.executor import SQLExecutionError, SQLExecutor


def _rest(settings, handler):
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url=f"{settings.supabase_url}/rest/v1",
    )
    return SupabaseRestClient(settings, client=client)


@pytest.mark.asyncio
async def test_rpc_sends_sql_with_caller_token(settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["authorization"]
        seen["apikey"] = request.headers["apikey"]
        return httpx.Response(200, json=[{"name": "Roads", "value": 3}])

    rest = _rest(settings, handler)
    rows = await rest.rpc("SELECT 1", access_token="caller-token")

    assert rows == [{"name": "Roads", "value": 3}]
    assert seen == {
        "path": "/rest/v1/rpc/execute_raw_sql",
        "body": {"sql_query": "SELECT 1"},
        "auth": "Bearer caller-token",
        "apikey": "test-anon-key",
    }


@pytest.mark.asyncio
async def test_rpc_without_token_uses_anon_key(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"] == "Bearer test-anon-key"
        return httpx.Response(200, json=[])

    assert await _rest(settings, handler).rpc("SELECT 1") == []


@pytest.mark.asyncio
async def test_rpc_non_list_body_is_no_rows(settings):
    rest = _rest(settings, lambda request: httpx.Response(200, json={"rows": 1}))
    assert await rest.rpc("SELECT 1") == []


@pytest.mark.asyncio
async def test_rpc_error_message_from_body(settings):
    def handler(request):
        return httpx.Response(400, json={"code": "42601", "message": 'syntax error at or near "FROM"'})

    with pytest.raises(ExecutionChannelError) as exc_info:
        await _rest(settings, handler).rpc("SELECT FROM")
    assert exc_info.value.message == 'syntax error at or near "FROM"'
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_rpc_error_falls_back_to_text(settings):
    rest = _rest(settings, lambda request: httpx.Response(502, text="Bad Gateway"))
    with pytest.raises(ExecutionChannelError, match="Bad Gateway"):
        await rest.rpc("SELECT 1")


@pytest.mark.asyncio
async def test_rpc_transport_error(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with pytest.raises(ExecutionChannelError, match="connection refused"):
        await _rest(settings, handler).rpc("SELECT 1")


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open(settings):
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
    async with SupabaseRestClient(settings, client=client):
        pass
    assert not client.is_closed
    await client.aclose()


@pytest.mark.asyncio
async def test_executor_returns_rows(settings, category_plan, staff_identity):
    def handler(request):
        assert json.loads(request.content) == {"sql_query": category_plan.sql}
        assert request.headers["authorization"] == "Bearer staff-token"
        return httpx.Response(200, json=[{"name": "Roads", "value": 12}])

    executor = SQLExecutor(settings, _rest(settings, handler))
    assert await executor.execute(category_plan, staff_identity) == [{"name": "Roads", "value": 12}]


@pytest.mark.asyncio
async def test_executor_wraps_channel_error(settings, category_plan, staff_identity):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(400, json={"message": "function strftime does not exist"})

    executor = SQLExecutor(settings, _rest(settings, handler))
    with pytest.raises(SQLExecutionError) as exc_info:
        await executor.execute(category_plan, staff_identity)
    assert exc_info.value.message == "function strftime does not exist"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_executor_timeout(settings, category_plan, staff_identity):
    class SlowRest:
        async def rpc(self, sql, access_token=None):
            await asyncio.sleep(1)
            return []

    fast_settings = settings.model_copy(update={"execution_timeout": 0.01})
    with pytest.raises(SQLExecutionError, match="timed out"):
        await SQLExecutor(fast_settings, SlowRest()).execute(category_plan, staff_identity)
