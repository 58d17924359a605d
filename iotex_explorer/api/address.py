"""
IoTeX Explorer - Address API
==============================
Handlers HTTP per le route address e relativa route table.

Endpoints:
- GET  /address/{id}                    - pagina address (shell HTML)
- POST /api/getAddressId                - dettaglio indirizzo
- POST /api/getAddressTransfersId       - transfers paginati
- POST /api/getAddressExecutionsId      - executions paginate
- POST /api/getAddressVotersId          - voters (vote closing)
- POST /api/getAddressSettleDepositsId  - settle deposits paginati
- POST /api/getAddressCreateDepositsId  - create deposits paginati
"""

from typing import Any, Dict, List

from fastapi import Depends, Request
from fastapi.responses import HTMLResponse

from iotex_explorer.api.deps import get_address_service, get_settings_dep
from iotex_explorer.api.routes import RouteDescriptor
from iotex_explorer.api.schemas import AddressRequest, RelationRequest
from iotex_explorer.config import ExplorerSettings
from iotex_explorer.constants import ADDRESS
from iotex_explorer.services.address_service import AddressService


# ============================================================================
# PAGE
# ============================================================================

async def address_handler(
    request: Request,
    id: str,
    settings: ExplorerSettings = Depends(get_settings_dep),
):
    """Address page shell, content is rendered client side"""
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "address.html",
        {
            "title": f"Address {id}",
            "address_id": id,
            "route_prefix": settings.route_prefix,
            "client_script": settings.client_script,
        },
    )


# ============================================================================
# JSON HANDLERS
# ============================================================================

async def get_address_id(
    body: AddressRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_address(body.id)


async def get_address_transfers_id(
    body: RelationRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_transfers(body.id, body.offset, body.count)


async def get_address_executions_id(
    body: RelationRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_executions(body.id, body.offset, body.count)


async def get_address_voters_id(
    body: RelationRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_voters(body.id, body.offset, body.count)


async def get_address_settle_deposits_id(
    body: RelationRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_settle_deposits(body.id, body.offset, body.count)


async def get_address_create_deposits_id(
    body: RelationRequest,
    service: AddressService = Depends(get_address_service),
) -> Dict[str, Any]:
    return await service.get_create_deposits(body.id, body.offset, body.count)


# ============================================================================
# ROUTE TABLE
# ============================================================================

ADDRESS_ROUTES: List[RouteDescriptor] = [
    RouteDescriptor("get", "address", ADDRESS.INDEX, address_handler,
                    options={"response_class": HTMLResponse}),
    RouteDescriptor("post", "getAddressId", ADDRESS.GET_ADDRESS, get_address_id),
    RouteDescriptor("post", "getAddressTransfersId", ADDRESS.GET_TRANSFERS, get_address_transfers_id),
    RouteDescriptor("post", "getAddressExecutionsId", ADDRESS.GET_EXECUTIONS, get_address_executions_id),
    RouteDescriptor("post", "getAddressVotersId", ADDRESS.GET_VOTERS, get_address_voters_id),
    RouteDescriptor("post", "getAddressSettleDepositsId", ADDRESS.GET_SETTLE_DEPOSITS,
                    get_address_settle_deposits_id),
    RouteDescriptor("post", "getAddressCreateDepositsId", ADDRESS.GET_CREATE_DEPOSITS,
                    get_address_create_deposits_id),
]


__all__ = [
    "ADDRESS_ROUTES",
    "address_handler",
    "get_address_id",
    "get_address_transfers_id",
    "get_address_executions_id",
    "get_address_voters_id",
    "get_address_settle_deposits_id",
    "get_address_create_deposits_id",
]
