"""
IoTeX Explorer - API Dependencies
===================================
FastAPI dependency injection utilities.

Instances live on `app.state`, set by `create_explorer_app`.
"""

from fastapi import HTTPException, Request, status

from iotex_explorer.config import ExplorerSettings
from iotex_explorer.services.address_service import AddressService


def _state(request: Request, name: str, label: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not initialized"
        )
    return value


def get_settings_dep(request: Request) -> ExplorerSettings:
    """Dependency: explorer settings"""
    return _state(request, "settings", "Configuration")


def get_address_service(request: Request) -> AddressService:
    """Dependency: address service"""
    return _state(request, "address_service", "Address service")


__all__ = [
    'get_settings_dep',
    'get_address_service',
]
