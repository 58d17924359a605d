"""
IoTeX Explorer - Pytest Configuration
=======================================
Fixtures e configurazione per testing.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from iotex_explorer.config import ExplorerSettings
from iotex_explorer.errors import GatewayRPCError
from iotex_explorer.explorer.server import create_explorer_app
from iotex_explorer.services.address_service import AddressService


# ============================================================================
# FAKE GATEWAY
# ============================================================================

class FakeGateway:
    """
    In-memory iotexCore gateway.

    `results` maps method name -> value returned, `failures` maps method
    name -> exception raised, `delay` makes every call sleep first.
    """

    def __init__(self):
        self.results: Dict[str, Any] = {}
        self.failures: Dict[str, Exception] = {}
        self.delay: Optional[float] = None
        self.calls: List[Tuple[str, tuple]] = []
        self.closed = False

    async def _lookup(self, method: str, *args):
        self.calls.append((method, args))
        if self.delay is not None:
            await asyncio.sleep(self.delay)
        if method in self.failures:
            raise self.failures[method]
        return self.results.get(method)

    async def get_address_details(self, id):
        return await self._lookup("get_address_details", id)

    async def get_executions_by_address(self, id, offset, count):
        return await self._lookup("get_executions_by_address", id, offset, count)

    async def get_transfers_by_address(self, id, offset, count):
        return await self._lookup("get_transfers_by_address", id, offset, count)

    async def get_settle_deposits_by_address(self, id, offset, count):
        return await self._lookup("get_settle_deposits_by_address", id, offset, count)

    async def get_create_deposits_by_address(self, id, offset, count):
        return await self._lookup("get_create_deposits_by_address", id, offset, count)

    async def get_votes_by_address(self, id, offset, count):
        return await self._lookup("get_votes_by_address", id, offset, count)

    async def aclose(self):
        self.closed = True


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture
def test_config():
    """Test configuration (solo console, nessun file)"""
    return ExplorerSettings(
        _env_file=None,
        log_to_file=False,
        enable_console=False,
        gateway_timeout=1.0,
        dev_mode=True,
    )


# ============================================================================
# GATEWAY / SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def failing_gateway():
    """Gateway che fallisce ogni lookup"""
    gateway = FakeGateway()
    for method in (
        "get_address_details",
        "get_executions_by_address",
        "get_transfers_by_address",
        "get_settle_deposits_by_address",
        "get_create_deposits_by_address",
        "get_votes_by_address",
    ):
        gateway.failures[method] = GatewayRPCError("boom", code="GATEWAY_RPC_ERROR")
    return gateway


@pytest.fixture
def address_service(gateway):
    return AddressService(gateway, timeout=1.0)


# ============================================================================
# APP FIXTURES
# ============================================================================

@pytest.fixture
def app(test_config, gateway):
    return create_explorer_app(test_config, gateway=gateway)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# HELPER FIXTURES
# ============================================================================

@pytest.fixture
def sample_address():
    return "io1qyqsyqcy6nm58gjd2wr035wz5eyd5uq47zyqpng3gxe7nh"


@pytest.fixture
def sample_transfers():
    return [
        {"id": "t1", "sender": "io1a", "recipient": "io1b", "amount": "100"},
        {"id": "t2", "sender": "io1b", "recipient": "io1a", "amount": "25"},
    ]
