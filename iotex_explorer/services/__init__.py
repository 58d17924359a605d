"""
IoTeX Explorer - Services Package
===================================
High-level services over the iotexCore gateway.
"""

from iotex_explorer.services.address_service import AddressService, close_votes

__all__ = [
    "AddressService",
    "close_votes",
]
