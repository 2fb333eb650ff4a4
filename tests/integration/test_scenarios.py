"""
End-to-end scenarios run through every transport.

Each scenario is exercised against the Dispatcher directly, over stdio and
over HTTP, so the three surfaces stay in agreement.
"""

import asyncio
import io
import json

import pytest
from fastapi.testclient import TestClient

from sum_mcp.core.exceptions import ErrorKind
from sum_mcp.models.domain import InvocationRequest
from sum_mcp.services.auth import AuthGate
from sum_mcp.tools.dispatcher import Dispatcher
from sum_mcp.transports.jsonrpc import JsonRpcHandler
from sum_mcp.transports.stdio import StdioServer

pytestmark = pytest.mark.integration

SUCCESS_CASES = [
    ("sum.math.add", {"a": 3, "b": 2}, {"result": 5}),
    ("sum.math.sum", {"values": [1, 2, 3]}, {"count": 3, "sum": 6}),
    ("sum.math.avg", {"values": []}, {"count": 0, "average": None}),
]


def _call(name: str, arguments: dict, request_id: int = 1) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments},
    }


async def _stdio(handler: JsonRpcHandler, *messages: dict) -> list[dict]:
    reader = asyncio.StreamReader()
    for message in messages:
        reader.feed_data((json.dumps(message) + "\n").encode("utf-8"))
    reader.feed_eof()
    output = io.StringIO()
    await StdioServer(handler).serve(reader, output)
    return [json.loads(line) for line in output.getvalue().splitlines()]


# =============================================================================
# Math tools
# =============================================================================


class TestMathScenarios:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments,expected", SUCCESS_CASES)
    async def test_dispatcher(self, dispatcher, name, arguments, expected) -> None:
        result = await dispatcher.dispatch(InvocationRequest(tool_name=name, arguments=arguments))

        assert result.is_success
        assert result.payload == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments,expected", SUCCESS_CASES)
    async def test_stdio(self, registry, dispatcher, test_settings, name, arguments, expected) -> None:
        frames = await _stdio(JsonRpcHandler(registry, dispatcher, test_settings), _call(name, arguments))

        assert frames[0]["result"]["structuredContent"] == expected
        assert json.loads(frames[0]["result"]["content"][0]["text"]) == expected

    @pytest.mark.parametrize("name,arguments,expected", SUCCESS_CASES)
    def test_http(self, client: TestClient, name, arguments, expected) -> None:
        rest = client.post("/v1/tools/execute", json={"name": name, "arguments": arguments})
        rpc = client.post("/mcp", json=_call(name, arguments))

        assert rest.json()["result"] == expected
        assert rpc.json()["result"]["structuredContent"] == expected


# =============================================================================
# Unknown tool
# =============================================================================


class TestUnknownTool:
    @pytest.mark.asyncio
    async def test_dispatcher(self, dispatcher) -> None:
        result = await dispatcher.dispatch(InvocationRequest(tool_name="sum.nope"))

        assert result.kind is ErrorKind.UNKNOWN_TOOL

    def test_http(self, client: TestClient) -> None:
        assert client.post("/v1/tools/execute", json={"name": "sum.nope"}).status_code == 404
        assert client.post("/mcp", json=_call("sum.nope", {})).json()["error"]["data"] == {
            "kind": "UNKNOWN_TOOL"
        }


# =============================================================================
# Rate limiting
# =============================================================================


class TestRateLimit:
    @pytest.mark.asyncio
    async def test_eleventh_call_in_a_second_is_rejected(self, dispatcher, fake_clock) -> None:
        outcomes = []
        for _ in range(11):
            result = await dispatcher.dispatch(
                InvocationRequest(tool_name="sum.math.add", arguments={"a": 1, "b": 1})
            )
            outcomes.append(None if result.is_success else result.kind)
            fake_clock.advance(0.05)

        assert outcomes[:10] == [None] * 10
        assert outcomes[10] is ErrorKind.RATE_LIMITED

    @pytest.mark.asyncio
    async def test_stdio(self, registry, dispatcher, test_settings) -> None:
        messages = [_call("sum.math.add", {"a": 1, "b": 1}, i) for i in range(11)]

        frames = await _stdio(JsonRpcHandler(registry, dispatcher, test_settings), *messages)

        assert sum("result" in f for f in frames) == 10
        assert frames[10]["error"]["code"] == -32029

    def test_http(self, client: TestClient) -> None:
        statuses = [
            client.post("/mcp", json=_call("sum.math.add", {"a": 1, "b": 1}, i)).status_code
            for i in range(11)
        ]

        assert statuses == [200] * 10 + [429]


# =============================================================================
# Authentication
# =============================================================================


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_wrong_key_never_reaches_limiter(self, registry, rate_limiter) -> None:
        dispatcher = Dispatcher(registry, AuthGate("abc"), rate_limiter)

        result = await dispatcher.dispatch(
            InvocationRequest(tool_name="sum.math.add", arguments={"a": 1, "b": 1}, credential="xyz")
        )

        assert result.kind is ErrorKind.UNAUTHORIZED
        assert rate_limiter.partition_count == 0

    def test_http(self, secured_client: TestClient) -> None:
        denied = secured_client.post(
            "/mcp", json=_call("sum.math.add", {"a": 1, "b": 1}), headers={"X-Api-Key": "xyz"}
        )
        allowed = secured_client.post(
            "/mcp", json=_call("sum.math.add", {"a": 1, "b": 1}), headers={"X-Api-Key": "abc"}
        )

        assert denied.status_code == 401
        assert allowed.json()["result"]["structuredContent"] == {"result": 2.0}
