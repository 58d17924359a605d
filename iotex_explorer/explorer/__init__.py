"""
IoTeX Explorer - Explorer Package
===================================
FastAPI web explorer server.
"""

from iotex_explorer.explorer.server import create_explorer_app, run_explorer

__all__ = [
    "create_explorer_app",
    "run_explorer",
]
