"""
IoTeX Explorer - Gateway Package
==================================
Client del gateway iotexCore.
"""

from iotex_explorer.gateway.client import GatewayProtocol, IotexCoreClient, create_gateway

__all__ = [
    "GatewayProtocol",
    "IotexCoreClient",
    "create_gateway",
]
