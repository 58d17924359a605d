"""
IoTeX Explorer - Route Registration
=====================================
Route descriptors and fail-fast registration against a server
exposing FastAPI-style `get` / `post` decorators (FastAPI, APIRouter).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Sequence

from iotex_explorer.errors import format_route_error
from iotex_explorer.logging_setup import get_logger

logger = get_logger("api.routes")

SUPPORTED_METHODS = ("get", "post")


@dataclass(frozen=True)
class RouteDescriptor:
    """One (method, name, endpoint, handler) entry of a route table"""
    method: str
    name: str
    endpoint: str
    handler: Callable[..., Any]
    options: Dict[str, Any] = field(default_factory=dict)


def validate_routes(routes: Iterable[RouteDescriptor]) -> None:
    """
    Check every descriptor before anything is registered.

    Raises:
        InvalidRouteError: method is not 'get' or 'post'
    """
    for route in routes:
        if not isinstance(route.method, str) or route.method.lower() not in SUPPORTED_METHODS:
            raise format_route_error(route.name, route.method)


def register_routes(server: Any, routes: Sequence[RouteDescriptor], prefix: str = "") -> None:
    """
    Register each descriptor with `server.get` or `server.post`.

    Args:
        server: FastAPI app or APIRouter
        routes: ordered route table
        prefix: path prefix ('' or '/x')

    Raises:
        InvalidRouteError: unknown method (nothing is registered)
    """
    validate_routes(routes)

    for route in routes:
        register = server.get if route.method.lower() == "get" else server.post
        path = f"{prefix}{route.endpoint}"
        register(path, name=route.name, **route.options)(route.handler)
        logger.debug(f"Registered {route.method.upper()} {path} -> {route.name}")


__all__ = [
    "SUPPORTED_METHODS",
    "RouteDescriptor",
    "validate_routes",
    "register_routes",
]
