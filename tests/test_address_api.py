"""
IoTeX Explorer - Address API Tests
====================================
HTTP tests for the address routes.
"""

import pytest
from fastapi.testclient import TestClient

from iotex_explorer.errors import GatewayTimeoutError
from iotex_explorer.explorer.server import create_explorer_app


class TestAddressEndpoints:
    """Test POST address endpoints"""

    def test_get_address(self, client, gateway, sample_address):
        gateway.results["get_address_details"] = {"address": sample_address, "nonce": 7}

        response = client.post("/api/getAddressId", json={"id": sample_address})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "address": {"address": sample_address, "nonce": 7}}

    def test_get_address_failure(self, client, gateway, sample_address):
        gateway.failures["get_address_details"] = GatewayTimeoutError("slow")

        response = client.post("/api/getAddressId", json={"id": sample_address})

        assert response.status_code == 200
        assert response.json() == {
            "ok": False,
            "error": {
                "code": "FAIL_GET_ADDRESS",
                "message": "address.error.failGetAddress",
                "data": {"id": sample_address},
            },
        }

    def test_get_transfers(self, client, gateway, sample_transfers):
        gateway.results["get_transfers_by_address"] = sample_transfers

        response = client.post(
            "/api/getAddressTransfersId", json={"id": "io1a", "offset": 10, "count": 20}
        )

        assert response.json() == {"ok": True, "transfers": sample_transfers, "offset": 10, "count": 20}
        assert gateway.calls == [("get_transfers_by_address", ("io1a", 10, 20))]

    @pytest.mark.parametrize("path,lookup,key", [
        ("/api/getAddressExecutionsId", "get_executions_by_address", "executions"),
        ("/api/getAddressSettleDepositsId", "get_settle_deposits_by_address", "settleDeposits"),
        ("/api/getAddressCreateDepositsId", "get_create_deposits_by_address", "createDeposits"),
    ])
    def test_relation_endpoints(self, client, gateway, path, lookup, key):
        gateway.results[lookup] = [{"id": "x1"}]

        response = client.post(path, json={"id": "io1a", "offset": 0, "count": 5})

        assert response.json() == {"ok": True, key: [{"id": "x1"}], "offset": 0, "count": 5}

    def test_executions_failure_is_structured(self, client, gateway):
        gateway.failures["get_executions_by_address"] = ValueError("internal detail")

        response = client.post("/api/getAddressExecutionsId", json={"id": "io1a", "offset": 0, "count": 5})

        body = response.json()
        assert body["ok"] is False
        assert body["error"] == {
            "code": "FAIL_GET_ADDRESS_EXECUTIONS",
            "message": "address.error.failGetExecutions",
            "data": {"id": "io1a"},
        }

    def test_get_voters(self, client, gateway):
        gateway.results["get_votes_by_address"] = [{"id": "a"}, {"id": "a"}, None, {"id": "b"}]

        response = client.post("/api/getAddressVotersId", json={"id": "io1a", "offset": 0, "count": 3})

        assert response.json() == {
            "ok": True,
            "voters": [{"id": "a", "out": True}, {"id": "a"}, {"id": "b", "out": True}],
            "offset": 0,
            "count": 3,
        }

    def test_numeric_id_forwarded_as_string(self, client, gateway):
        gateway.results["get_address_details"] = {"id": "123"}

        response = client.post("/api/getAddressId", json={"id": 123})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "address": {"id": "123"}}
        assert gateway.calls == [("get_address_details", ("123",))]


class TestRequestValidation:
    """Test malformed bodies"""

    def test_missing_id(self, client, gateway):
        response = client.post("/api/getAddressId", json={})

        assert response.status_code == 422
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "INVALID_REQUEST"
        assert body["error"]["message"] == "address.error.invalidRequest"
        assert gateway.calls == []

    def test_negative_offset(self, client, gateway):
        response = client.post("/api/getAddressTransfersId", json={"id": "io1a", "offset": -1, "count": 5})

        assert response.status_code == 422
        errors = response.json()["error"]["data"]["errors"]
        assert any(error["loc"][-1] == "offset" for error in errors)
        assert gateway.calls == []

    def test_missing_pagination(self, client, gateway):
        response = client.post("/api/getAddressTransfersId", json={"id": "io1a"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["code"] == "INVALID_REQUEST"
        missing = {error["loc"][-1] for error in body["error"]["data"]["errors"]}
        assert missing == {"offset", "count"}
        assert gateway.calls == []


class TestAddressPage:
    """Test address index page"""

    def test_renders_shell(self, client, sample_address):
        response = client.get(f"/address/{sample_address}")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert sample_address in response.text
        assert '<script src="/main.js"></script>' in response.text


class TestServerSurface:
    """Test middleware, health and route prefix"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["version"] == "1.0.0"

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert response.headers["X-Request-ID"]

        response = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_api_responses_not_cached(self, client, gateway):
        response = client.post("/api/getAddressId", json={"id": "io1a"})

        assert response.headers["Cache-Control"] == "no-cache, no-store, must-revalidate"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_route_prefix(self, test_config, gateway):
        config = test_config.model_copy(update={"route_prefix": "/explorer"})
        gateway.results["get_address_details"] = {"balance": "0"}

        with TestClient(create_explorer_app(config, gateway=gateway)) as client:
            assert client.post("/explorer/api/getAddressId", json={"id": "io1a"}).json()["ok"] is True
            assert client.post("/api/getAddressId", json={"id": "io1a"}).status_code == 404

    def test_injected_gateway_not_closed(self, app, gateway):
        with TestClient(app):
            pass

        assert gateway.closed is False
