"""Fetch platform-specific go-ipfs release binaries."""

from go_ipfs_dep.constants import PACKAGE_VERSION
from go_ipfs_dep.installer import download
from go_ipfs_dep.errors import (
    GoIpfsDepError,
    ValidationError,
    TransferError,
    ExtractionError,
)
from go_ipfs_dep.support import VERSIONS, PLATFORMS, ARCHS
from go_ipfs_dep.types import InstallResult

__version__ = PACKAGE_VERSION

__all__ = [
    "download",
    "InstallResult",

    # Supported releases
    "VERSIONS",
    "PLATFORMS",
    "ARCHS",

    # Error types
    "GoIpfsDepError",
    "ValidationError",
    "TransferError",
    "ExtractionError",
]
