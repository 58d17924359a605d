"""
IoTeX Explorer - Gateway Client Tests
=======================================
Unit tests for IotexCoreClient over httpx.MockTransport.
"""

import json

import httpx
import pytest

from iotex_explorer.errors import (
    GatewayConnectionError,
    GatewayError,
    GatewayHTTPError,
    GatewayRPCError,
    GatewayTimeoutError,
)
from iotex_explorer.gateway.client import IotexCoreClient

GATEWAY_URL = "http://gateway.test/"


def _client(handler) -> IotexCoreClient:
    return IotexCoreClient(GATEWAY_URL, timeout=1.0, transport=httpx.MockTransport(handler))


def _rpc_result(request: httpx.Request, result) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})


class TestRequests:
    """Test JSON-RPC request shape"""

    @pytest.mark.asyncio
    async def test_address_details(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return _rpc_result(request, {"address": "io1a", "balance": "9"})

        async with _client(handler) as gateway:
            result = await gateway.get_address_details("io1a")

        assert result == {"address": "io1a", "balance": "9"}
        assert seen[0]["jsonrpc"] == "2.0"
        assert seen[0]["method"] == "getAddressDetails"
        assert seen[0]["params"] == ["io1a"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("lookup,rpc_method", [
        ("get_executions_by_address", "getExecutionsByAddress"),
        ("get_transfers_by_address", "getTransfersByAddress"),
        ("get_settle_deposits_by_address", "getSettleDepositsByAddress"),
        ("get_create_deposits_by_address", "getCreateDepositsByAddress"),
        ("get_votes_by_address", "getVotesByAddress"),
    ])
    async def test_relation_methods(self, lookup, rpc_method):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return _rpc_result(request, [])

        async with _client(handler) as gateway:
            result = await getattr(gateway, lookup)("io1a", 20, 10)

        assert result == []
        assert seen[0]["method"] == rpc_method
        assert seen[0]["params"] == ["io1a", 20, 10]

    @pytest.mark.asyncio
    async def test_request_ids_increase(self):
        ids = []

        def handler(request):
            ids.append(json.loads(request.content)["id"])
            return _rpc_result(request, None)

        async with _client(handler) as gateway:
            await gateway.get_address_details("a")
            await gateway.get_address_details("b")

        assert ids == [1, 2]

    @pytest.mark.asyncio
    async def test_user_agent_header(self):
        agents = []

        def handler(request):
            agents.append(request.headers["user-agent"])
            return _rpc_result(request, None)

        async with _client(handler) as gateway:
            await gateway.get_address_details("a")

        assert agents[0].startswith("iotex-explorer/")


class TestErrors:
    """Test error translation"""

    @pytest.mark.asyncio
    async def test_rpc_error(self):
        def handler(request):
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "not found"}})

        async with _client(handler) as gateway:
            with pytest.raises(GatewayRPCError) as exc_info:
                await gateway.get_address_details("io1a")

        assert "not found" in exc_info.value.message
        assert exc_info.value.details["method"] == "getAddressDetails"

    @pytest.mark.asyncio
    async def test_http_error(self):
        async with _client(lambda request: httpx.Response(502)) as gateway:
            with pytest.raises(GatewayHTTPError) as exc_info:
                await gateway.get_transfers_by_address("io1a", 0, 10)

        assert exc_info.value.details["status_code"] == 502

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        async with _client(lambda request: httpx.Response(200, content=b"<html>")) as gateway:
            with pytest.raises(GatewayRPCError):
                await gateway.get_votes_by_address("io1a", 0, 10)

    @pytest.mark.asyncio
    async def test_missing_result(self):
        async with _client(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1})) as gateway:
            with pytest.raises(GatewayRPCError):
                await gateway.get_votes_by_address("io1a", 0, 10)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as gateway:
            with pytest.raises(GatewayTimeoutError):
                await gateway.get_address_details("io1a")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as gateway:
            with pytest.raises(GatewayConnectionError) as exc_info:
                await gateway.get_address_details("io1a")

        assert isinstance(exc_info.value, GatewayError)
