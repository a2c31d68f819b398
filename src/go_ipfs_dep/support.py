"""Supported go-ipfs releases and platform classification."""
from go_ipfs_dep.constants import ARCHS, PLATFORMS, VERSIONS
from go_ipfs_dep.errors import ValidationError
from go_ipfs_dep.types import ArchiveFormat

__all__ = ["VERSIONS", "PLATFORMS", "ARCHS", "verify", "is_windows", "archive_format"]


def verify(version: str, platform: str, arch: str) -> None:
    """Raise ValidationError for the first field outside the catalog."""
    for field, value, known in (
        ("version", version, VERSIONS),
        ("platform", platform, PLATFORMS),
        ("architecture", arch, ARCHS),
    ):
        if value not in known:
            raise ValidationError(field, value)


def is_windows(platform: str) -> bool:
    return platform == "windows"


def archive_format(platform: str) -> ArchiveFormat:
    """Windows releases ship as zip, everything else as tar+gzip."""
    return ArchiveFormat.ZIP if is_windows(platform) else ArchiveFormat.TAR_GZ
