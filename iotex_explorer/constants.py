"""
IoTeX Explorer - Constants
============================
Route paths, codici errore e default del layer address.

Last Updated: 2026-10-19
Version: 1.0.0
"""

from typing import Final


# ============================================================================
# ROUTE PATHS
# ============================================================================

class ADDRESS:
    """Address route paths (relative to the route prefix)"""
    INDEX: Final[str] = "/address/{id}"
    GET_ADDRESS: Final[str] = "/api/getAddressId"
    GET_TRANSFERS: Final[str] = "/api/getAddressTransfersId"
    GET_EXECUTIONS: Final[str] = "/api/getAddressExecutionsId"
    GET_VOTERS: Final[str] = "/api/getAddressVotersId"
    GET_SETTLE_DEPOSITS: Final[str] = "/api/getAddressSettleDepositsId"
    GET_CREATE_DEPOSITS: Final[str] = "/api/getAddressCreateDepositsId"


HEALTH_PATH: Final[str] = "/health"


# ============================================================================
# ERROR CODES
# ============================================================================

FAIL_GET_ADDRESS: Final[str] = "FAIL_GET_ADDRESS"
FAIL_GET_ADDRESS_TRANSFERS: Final[str] = "FAIL_GET_ADDRESS_TRANSFERS"
FAIL_GET_ADDRESS_EXECUTIONS: Final[str] = "FAIL_GET_ADDRESS_EXECUTIONS"
FAIL_GET_ADDRESS_VOTES: Final[str] = "FAIL_GET_ADDRESS_VOTES"
FAIL_GET_SETTLE_DEPOSITS: Final[str] = "FAIL_GET_SETTLE_DEPOSITS"
FAIL_GET_CREATE_DEPOSITS: Final[str] = "FAIL_GET_CREATE_DEPOSITS"
INVALID_REQUEST: Final[str] = "INVALID_REQUEST"


# i18n keys resolved by the client
MSG_FAIL_GET_ADDRESS: Final[str] = "address.error.failGetAddress"
MSG_FAIL_GET_TRANSFERS: Final[str] = "address.error.failGetTransfers"
MSG_FAIL_GET_EXECUTIONS: Final[str] = "address.error.failGetExecutions"
MSG_FAIL_GET_VOTES: Final[str] = "address.error.failGetVotes"
MSG_FAIL_GET_SETTLE_DEPOSITS: Final[str] = "address.error.failGetSettleDeposits"
MSG_FAIL_GET_CREATE_DEPOSITS: Final[str] = "address.error.failGetCreateDeposits"
MSG_INVALID_REQUEST: Final[str] = "address.error.invalidRequest"


# ============================================================================
# GATEWAY METHODS (JSON-RPC)
# ============================================================================

RPC_GET_ADDRESS_DETAILS: Final[str] = "getAddressDetails"
RPC_GET_EXECUTIONS_BY_ADDRESS: Final[str] = "getExecutionsByAddress"
RPC_GET_TRANSFERS_BY_ADDRESS: Final[str] = "getTransfersByAddress"
RPC_GET_SETTLE_DEPOSITS_BY_ADDRESS: Final[str] = "getSettleDepositsByAddress"
RPC_GET_CREATE_DEPOSITS_BY_ADDRESS: Final[str] = "getCreateDepositsByAddress"
RPC_GET_VOTES_BY_ADDRESS: Final[str] = "getVotesByAddress"

JSONRPC_VERSION: Final[str] = "2.0"


# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_GATEWAY_URL: Final[str] = "http://localhost:14004/"
DEFAULT_GATEWAY_TIMEOUT: Final[float] = 10.0
DEFAULT_API_PORT: Final[int] = 4004
DEFAULT_CLIENT_SCRIPT: Final[str] = "/main.js"

DEFAULT_OFFSET: Final[int] = 0
DEFAULT_COUNT: Final[int] = 10

# Vote closing: nessun id reale e' vuoto
VOTE_ID_SENTINEL: Final[str] = ""


__all__ = [
    "ADDRESS",
    "HEALTH_PATH",
    "FAIL_GET_ADDRESS",
    "FAIL_GET_ADDRESS_TRANSFERS",
    "FAIL_GET_ADDRESS_EXECUTIONS",
    "FAIL_GET_ADDRESS_VOTES",
    "FAIL_GET_SETTLE_DEPOSITS",
    "FAIL_GET_CREATE_DEPOSITS",
    "INVALID_REQUEST",
    "MSG_FAIL_GET_ADDRESS",
    "MSG_FAIL_GET_TRANSFERS",
    "MSG_FAIL_GET_EXECUTIONS",
    "MSG_FAIL_GET_VOTES",
    "MSG_FAIL_GET_SETTLE_DEPOSITS",
    "MSG_FAIL_GET_CREATE_DEPOSITS",
    "MSG_INVALID_REQUEST",
    "RPC_GET_ADDRESS_DETAILS",
    "RPC_GET_EXECUTIONS_BY_ADDRESS",
    "RPC_GET_TRANSFERS_BY_ADDRESS",
    "RPC_GET_SETTLE_DEPOSITS_BY_ADDRESS",
    "RPC_GET_CREATE_DEPOSITS_BY_ADDRESS",
    "RPC_GET_VOTES_BY_ADDRESS",
    "JSONRPC_VERSION",
    "DEFAULT_GATEWAY_URL",
    "DEFAULT_GATEWAY_TIMEOUT",
    "DEFAULT_API_PORT",
    "DEFAULT_CLIENT_SCRIPT",
    "DEFAULT_OFFSET",
    "DEFAULT_COUNT",
    "VOTE_ID_SENTINEL",
]
