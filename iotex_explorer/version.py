"""
IoTeX Explorer - Version Management
=====================================
Versioning semantico e build info.
"""

from typing import NamedTuple


class VersionInfo(NamedTuple):
    """Version information structure"""
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""


# Current version (Semantic Versioning)
VERSION = VersionInfo(
    major=1,
    minor=0,
    patch=0,
    prerelease="",
    build=""
)


def get_version_string() -> str:
    """
    Get version as string.

    Returns:
        str: Version (e.g., "1.0.0", "1.0.0-beta", "1.0.0+build123")
    """
    version_str = f"{VERSION.major}.{VERSION.minor}.{VERSION.patch}"

    if VERSION.prerelease:
        version_str += f"-{VERSION.prerelease}"

    if VERSION.build:
        version_str += f"+{VERSION.build}"

    return version_str


def get_user_agent() -> str:
    """User-Agent verso il gateway, es. iotex-explorer/1.0.0"""
    return f"iotex-explorer/{get_version_string()}"


__version__ = get_version_string()
__version_info__ = VERSION

__all__ = [
    "__version__",
    "__version_info__",
    "VERSION",
    "get_version_string",
    "get_user_agent",
]
