"""
IoTeX Explorer - iotexCore Gateway Client
===========================================
Client JSON-RPC asincrono verso il gateway iotexCore.

Ogni lookup e' una singola POST JSON-RPC 2.0; nessun retry, nessuna cache.
Gli errori di trasporto e di protocollo vengono tradotti nella gerarchia
GatewayError.
"""

import itertools
from typing import Any, Dict, List, Optional, Protocol

import httpx

from iotex_explorer.constants import (
    JSONRPC_VERSION,
    RPC_GET_ADDRESS_DETAILS,
    RPC_GET_EXECUTIONS_BY_ADDRESS,
    RPC_GET_TRANSFERS_BY_ADDRESS,
    RPC_GET_SETTLE_DEPOSITS_BY_ADDRESS,
    RPC_GET_CREATE_DEPOSITS_BY_ADDRESS,
    RPC_GET_VOTES_BY_ADDRESS,
)
from iotex_explorer.errors import (
    GatewayConnectionError,
    GatewayHTTPError,
    GatewayRPCError,
    GatewayTimeoutError,
    format_gateway_error,
)
from iotex_explorer.logging_setup import get_logger
from iotex_explorer.version import get_user_agent

logger = get_logger("gateway")


# ============================================================================
# GATEWAY PROTOCOL
# ============================================================================

class GatewayProtocol(Protocol):
    """Lookups exposed by the iotexCore gateway"""

    async def get_address_details(self, id: str) -> Any: ...

    async def get_executions_by_address(self, id: str, offset: int, count: int) -> Any: ...

    async def get_transfers_by_address(self, id: str, offset: int, count: int) -> Any: ...

    async def get_settle_deposits_by_address(self, id: str, offset: int, count: int) -> Any: ...

    async def get_create_deposits_by_address(self, id: str, offset: int, count: int) -> Any: ...

    async def get_votes_by_address(self, id: str, offset: int, count: int) -> Any: ...

    async def aclose(self) -> None: ...


# ============================================================================
# JSON-RPC CLIENT
# ============================================================================

class IotexCoreClient:
    """
    Async JSON-RPC client for the iotexCore gateway.

    Example:
        >>> async with IotexCoreClient("http://localhost:14004/") as gateway:
        ...     details = await gateway.get_address_details("io1...")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": get_user_agent(), **(headers or {})},
            transport=transport,
        )

    async def __aenter__(self) -> "IotexCoreClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ========================================================================
    # TRANSPORT
    # ========================================================================

    async def call(self, method: str, params: List[Any]) -> Any:
        """
        Esegue una chiamata JSON-RPC e restituisce il membro `result`.

        Raises:
            GatewayTimeoutError: timeout httpx
            GatewayConnectionError: errore di trasporto
            GatewayHTTPError: status non 2xx
            GatewayRPCError: risposta con `error` o non JSON-RPC
        """
        request_id = next(self._ids)
        body = {
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
            "method": method,
            "params": params,
        }

        try:
            response = await self._client.post("", json=body)
        except httpx.TimeoutException as e:
            raise format_gateway_error(
                method, f"timed out after {self.timeout}s",
                error_cls=GatewayTimeoutError, code="GATEWAY_TIMEOUT"
            ) from e
        except httpx.TransportError as e:
            raise format_gateway_error(
                method, str(e) or type(e).__name__,
                error_cls=GatewayConnectionError, code="GATEWAY_UNREACHABLE"
            ) from e

        if not response.is_success:
            raise format_gateway_error(
                method, f"HTTP {response.status_code}",
                error_cls=GatewayHTTPError, code="GATEWAY_HTTP_ERROR",
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise format_gateway_error(
                method, "response is not valid JSON",
                error_cls=GatewayRPCError, code="GATEWAY_BAD_RESPONSE"
            ) from e

        if not isinstance(payload, dict):
            raise format_gateway_error(
                method, "response is not a JSON-RPC object",
                error_cls=GatewayRPCError, code="GATEWAY_BAD_RESPONSE"
            )

        if payload.get("error") is not None:
            error = payload["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise format_gateway_error(
                method, message or "unknown error",
                error_cls=GatewayRPCError, code="GATEWAY_RPC_ERROR",
                rpc_error=error
            )

        if "result" not in payload:
            raise format_gateway_error(
                method, "response has no result",
                error_cls=GatewayRPCError, code="GATEWAY_BAD_RESPONSE"
            )

        logger.debug(f"{method} -> ok", extra_data={"rpc_id": request_id})
        return payload["result"]

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    async def get_address_details(self, id: str) -> Any:
        return await self.call(RPC_GET_ADDRESS_DETAILS, [id])

    async def get_executions_by_address(self, id: str, offset: int, count: int) -> Any:
        return await self.call(RPC_GET_EXECUTIONS_BY_ADDRESS, [id, offset, count])

    async def get_transfers_by_address(self, id: str, offset: int, count: int) -> Any:
        return await self.call(RPC_GET_TRANSFERS_BY_ADDRESS, [id, offset, count])

    async def get_settle_deposits_by_address(self, id: str, offset: int, count: int) -> Any:
        return await self.call(RPC_GET_SETTLE_DEPOSITS_BY_ADDRESS, [id, offset, count])

    async def get_create_deposits_by_address(self, id: str, offset: int, count: int) -> Any:
        return await self.call(RPC_GET_CREATE_DEPOSITS_BY_ADDRESS, [id, offset, count])

    async def get_votes_by_address(self, id: str, offset: int, count: int) -> Any:
        return await self.call(RPC_GET_VOTES_BY_ADDRESS, [id, offset, count])

    def __repr__(self) -> str:
        return f"IotexCoreClient(base_url={self.base_url!r}, timeout={self.timeout})"


def create_gateway(settings) -> IotexCoreClient:
    """Costruisce il client gateway da ExplorerSettings"""
    return IotexCoreClient(
        base_url=settings.gateway_url,
        timeout=settings.gateway_timeout,
        headers=settings.gateway_headers,
    )


__all__ = [
    "GatewayProtocol",
    "IotexCoreClient",
    "create_gateway",
]
