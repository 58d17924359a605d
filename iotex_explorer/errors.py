"""
IoTeX Explorer - Custom Exceptions
====================================
Gerarchia di eccezioni per config e gateway.

Last Updated: 2026-10-19
Version: 1.0.0
"""

from typing import Optional, Any


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class ExplorerException(Exception):
    """
    Eccezione base per tutte le eccezioni IoTeX Explorer.

    Attributes:
        message (str): Messaggio errore
        code (str): Codice errore (es. "GATEWAY_TIMEOUT")
        details (dict): Dettagli aggiuntivi
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializza eccezione per API/logging"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(ExplorerException):
    """Errore configurazione sistema"""
    pass


class InvalidRouteError(ConfigError):
    """Route descriptor invalido (metodo HTTP non supportato)"""
    pass


# ============================================================================
# GATEWAY ERRORS
# ============================================================================

class GatewayError(ExplorerException):
    """Errore generico gateway iotexCore"""
    pass


class GatewayConnectionError(GatewayError):
    """Gateway non raggiungibile"""
    pass


class GatewayTimeoutError(GatewayError):
    """Timeout chiamata gateway"""
    pass


class GatewayHTTPError(GatewayError):
    """Risposta HTTP non 2xx dal gateway"""
    pass


class GatewayRPCError(GatewayError):
    """Errore JSON-RPC restituito dal gateway"""
    pass


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_route_error(name: str, method: Any) -> InvalidRouteError:
    """
    Helper per errori di registrazione route.

    Example:
        >>> raise format_route_error("getAddressId", "put")
    """
    return InvalidRouteError(
        message=f"Route '{name}': unsupported method {method!r}, expected 'get' or 'post'",
        code="INVALID_ROUTE_METHOD",
        details={"route": name, "method": method}
    )


def format_gateway_error(
    method: str,
    issue: str,
    error_cls: type = GatewayError,
    code: Optional[str] = None,
    **details: Any
) -> GatewayError:
    """Helper per errori gateway"""
    return error_cls(
        message=f"Gateway call '{method}' failed: {issue}",
        code=code or "GATEWAY_ERROR",
        details={"method": method, **details}
    )


# ============================================================================
# EXPORT ALL
# ============================================================================

__all__ = [
    # Base
    "ExplorerException",

    # Config
    "ConfigError",
    "InvalidRouteError",

    # Gateway
    "GatewayError",
    "GatewayConnectionError",
    "GatewayTimeoutError",
    "GatewayHTTPError",
    "GatewayRPCError",

    # Helpers
    "format_route_error",
    "format_gateway_error",
]
