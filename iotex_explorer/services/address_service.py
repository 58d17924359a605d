"""
IoTeX Explorer - Address Service
==================================
Lookups per indirizzo verso il gateway iotexCore.

Last Updated: 2026-10-19
Version: 1.0.0

Features:
- Dettaglio indirizzo
- Relazioni paginate (transfers, executions, settle/create deposits)
- Voters con vote closing
- Envelope uniforme {ok, ...} per successo e fallimento
- Timeout per singola richiesta
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from iotex_explorer.api.schemas import address_envelope, error_envelope, page_envelope
from iotex_explorer.constants import (
    FAIL_GET_ADDRESS,
    FAIL_GET_ADDRESS_TRANSFERS,
    FAIL_GET_ADDRESS_EXECUTIONS,
    FAIL_GET_ADDRESS_VOTES,
    FAIL_GET_SETTLE_DEPOSITS,
    FAIL_GET_CREATE_DEPOSITS,
    MSG_FAIL_GET_ADDRESS,
    MSG_FAIL_GET_TRANSFERS,
    MSG_FAIL_GET_EXECUTIONS,
    MSG_FAIL_GET_VOTES,
    MSG_FAIL_GET_SETTLE_DEPOSITS,
    MSG_FAIL_GET_CREATE_DEPOSITS,
    VOTE_ID_SENTINEL,
)
from iotex_explorer.gateway.client import GatewayProtocol
from iotex_explorer.logging_setup import get_logger, PerformanceLogger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("address_service")

SLOW_GATEWAY_MS = 2000


# ============================================================================
# VOTE CLOSING
# ============================================================================

def close_votes(votes: Optional[Iterable[Optional[Dict[str, Any]]]]) -> List[Dict[str, Any]]:
    """
    Marca come `out` i voti il cui id differisce da quello precedente.

    Gli slot vuoti (None) vengono scartati, l'ordine e' preservato.
    Il record marcato e' quello corrente, non quello che lo precede.
    I record sono copiati: l'input non viene modificato.

    Examples:
        >>> close_votes([{"id": "a"}, {"id": "a"}])
        [{'id': 'a', 'out': True}, {'id': 'a'}]
        >>> close_votes(None)
        []
    """
    closed: List[Dict[str, Any]] = []
    if not votes:
        return closed

    previous_id = VOTE_ID_SENTINEL
    for vote in votes:
        if vote is None:
            continue

        record = dict(vote)
        if record.get("id") != previous_id:
            record["out"] = True
        previous_id = record.get("id")
        closed.append(record)

    return closed


# ============================================================================
# ADDRESS SERVICE
# ============================================================================

class AddressService:
    """
    Servizio lookups per indirizzo.

    Ogni operazione esegue una sola chiamata al gateway e restituisce
    sempre un envelope: nessuna eccezione esce dal servizio.

    Attributes:
        gateway: client iotexCore (o fake compatibile)
        timeout: timeout per chiamata in secondi (None = nessuno)

    Examples:
        >>> service = AddressService(gateway, timeout=5.0)
        >>> await service.get_transfers("io1abc", 0, 10)
        {'ok': True, 'transfers': [...], 'offset': 0, 'count': 10}
    """

    def __init__(self, gateway: GatewayProtocol, timeout: Optional[float] = None):
        self.gateway = gateway
        self.timeout = timeout

    # ========================================================================
    # INTERNALS
    # ========================================================================

    async def _call(self, operation: str, id: str, call: Callable[[], Awaitable[Any]]) -> Any:
        with PerformanceLogger(logger, operation, threshold_ms=SLOW_GATEWAY_MS, extra_data={"id": id}):
            if self.timeout is None:
                return await call()
            return await asyncio.wait_for(call(), timeout=self.timeout)

    def _failure(self, operation: str, id: str, error: Exception, code: str, message: str) -> Dict[str, Any]:
        if isinstance(error, asyncio.TimeoutError):
            reason = f"timed out after {self.timeout}s"
        else:
            reason = f"{type(error).__name__}: {error}"
        logger.error(
            f"{operation} failed for {id}: {reason}",
            extra_data={"id": id, "operation": operation, "code": code},
            exc_info=error
        )
        return error_envelope(code, message, {"id": id})

    async def _relation(
        self,
        operation: str,
        key: str,
        code: str,
        message: str,
        lookup: Callable[[str, int, int], Awaitable[Any]],
        id: str,
        offset: int,
        count: int,
        transform: Optional[Callable[[Any], Any]] = None,
    ) -> Dict[str, Any]:
        try:
            items = await self._call(operation, id, lambda: lookup(id, offset, count))
            if transform is not None:
                items = transform(items)
        except Exception as e:
            return self._failure(operation, id, e, code, message)

        return page_envelope(key, items, offset, count)

    # ========================================================================
    # LOOKUPS
    # ========================================================================

    async def get_address(self, id: str) -> Dict[str, Any]:
        """Dettaglio indirizzo: {ok, address}"""
        try:
            details = await self._call(
                "getAddressDetails", id, lambda: self.gateway.get_address_details(id)
            )
        except Exception as e:
            return self._failure("getAddressDetails", id, e, FAIL_GET_ADDRESS, MSG_FAIL_GET_ADDRESS)

        return address_envelope(details)

    async def get_transfers(self, id: str, offset: int, count: int) -> Dict[str, Any]:
        return await self._relation(
            "getTransfersByAddress", "transfers",
            FAIL_GET_ADDRESS_TRANSFERS, MSG_FAIL_GET_TRANSFERS,
            self.gateway.get_transfers_by_address, id, offset, count,
        )

    async def get_executions(self, id: str, offset: int, count: int) -> Dict[str, Any]:
        return await self._relation(
            "getExecutionsByAddress", "executions",
            FAIL_GET_ADDRESS_EXECUTIONS, MSG_FAIL_GET_EXECUTIONS,
            self.gateway.get_executions_by_address, id, offset, count,
        )

    async def get_settle_deposits(self, id: str, offset: int, count: int) -> Dict[str, Any]:
        return await self._relation(
            "getSettleDepositsByAddress", "settleDeposits",
            FAIL_GET_SETTLE_DEPOSITS, MSG_FAIL_GET_SETTLE_DEPOSITS,
            self.gateway.get_settle_deposits_by_address, id, offset, count,
        )

    async def get_create_deposits(self, id: str, offset: int, count: int) -> Dict[str, Any]:
        return await self._relation(
            "getCreateDepositsByAddress", "createDeposits",
            FAIL_GET_CREATE_DEPOSITS, MSG_FAIL_GET_CREATE_DEPOSITS,
            self.gateway.get_create_deposits_by_address, id, offset, count,
        )

    async def get_voters(self, id: str, offset: int, count: int) -> Dict[str, Any]:
        """Voti dell'indirizzo dopo vote closing: {ok, voters, offset, count}"""
        return await self._relation(
            "getVotesByAddress", "voters",
            FAIL_GET_ADDRESS_VOTES, MSG_FAIL_GET_VOTES,
            self.gateway.get_votes_by_address, id, offset, count,
            transform=close_votes,
        )


__all__ = [
    "AddressService",
    "close_votes",
]
