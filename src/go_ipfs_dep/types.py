"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ArchiveFormat(Enum):
    """Release archive formats, valued by file extension"""

    ZIP = ".zip"
    TAR_GZ = ".tar.gz"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class DistConfig:
    """Distribution server configuration for a single invocation"""

    dist_url: str


@dataclass(frozen=True)
class RequestParameters:
    """Fully resolved download request"""

    version: str
    platform: str
    arch: str
    install_path: Path
    dist_url: str


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Release archive derived from request parameters"""

    file_name: str
    url: str
    archive_format: ArchiveFormat


@dataclass(frozen=True)
class InstallResult:
    """Installed archive name and the directory it unpacked into"""

    file: str
    dir: str
