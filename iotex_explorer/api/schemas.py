"""
IoTeX Explorer - API Schemas
==============================
Pydantic models for API request/response validation.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# REQUESTS
# ============================================================================

class AddressRequest(BaseModel):
    """Body of get-address"""
    id: str = Field(..., description="Chain address (opaque, not validated)")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Numeri accettati come id, passati al gateway come stringa"""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class RelationRequest(AddressRequest):
    """Body of the paginated relation lookups, offset/count forwarded as sent"""
    offset: int = Field(..., ge=0, description="Pagination offset")
    count: int = Field(..., ge=0, description="Page size")


# ============================================================================
# ENVELOPES
# ============================================================================

class ErrorBody(BaseModel):
    """Machine-readable error, message is an i18n key"""
    code: str = Field(..., description="Error code")
    message: str = Field(..., description="i18n message key")
    data: Dict[str, Any] = Field(default_factory=dict, description="Error context")


class ErrorEnvelope(BaseModel):
    """Failure envelope"""
    ok: Literal[False] = False
    error: ErrorBody


class AddressEnvelope(BaseModel):
    """Success envelope of get-address"""
    ok: Literal[True] = True
    address: Any = None


class PageEnvelope(BaseModel):
    """Success envelope of a relation lookup, offset/count echo the request"""
    ok: Literal[True] = True
    offset: int
    count: int


class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Explorer version")
    timestamp: int = Field(..., description="Current timestamp")


# ============================================================================
# BUILDERS
# ============================================================================

def error_envelope(code: str, message: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the uniform failure envelope.

    Example:
        >>> error_envelope("FAIL_GET_ADDRESS", "address.error.failGetAddress", {"id": "io1"})
        {'ok': False, 'error': {'code': 'FAIL_GET_ADDRESS', 'message': 'address.error.failGetAddress', 'data': {'id': 'io1'}}}
    """
    return ErrorEnvelope(error=ErrorBody(code=code, message=message, data=data)).model_dump()


def address_envelope(address: Any) -> Dict[str, Any]:
    return AddressEnvelope(address=address).model_dump()


def page_envelope(key: str, items: Any, offset: int, count: int) -> Dict[str, Any]:
    """Success envelope carrying `items` under `key`"""
    envelope = PageEnvelope(offset=offset, count=count).model_dump()
    return {"ok": envelope["ok"], key: items, "offset": envelope["offset"], "count": envelope["count"]}


def validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Riduce gli errori pydantic a {loc, msg, type} serializzabili"""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in errors
    ]


__all__ = [
    'AddressRequest',
    'RelationRequest',
    'ErrorBody',
    'ErrorEnvelope',
    'AddressEnvelope',
    'PageEnvelope',
    'HealthResponse',
    'error_envelope',
    'address_envelope',
    'page_envelope',
    'validation_errors',
]
