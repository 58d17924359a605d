"""
IoTeX Explorer - Address API
==============================
Explorer server e address API sopra il gateway iotexCore.

Version: 1.0.0
Author: IoTeX Explorer Team
License: MIT
"""

__version__ = "1.0.0"
__author__ = "IoTeX Explorer Team"
__license__ = "MIT"

# Core imports
from iotex_explorer.config import ExplorerSettings, get_settings
from iotex_explorer.gateway.client import IotexCoreClient

# Services
from iotex_explorer.services.address_service import AddressService, close_votes

__all__ = [
    # Version
    "__version__",

    # Core
    "ExplorerSettings",
    "get_settings",
    "IotexCoreClient",

    # Services
    "AddressService",
    "close_votes",
]
