"""Resolve, fetch and unpack a go-ipfs release."""
import os
from pathlib import Path
from typing import Mapping, Optional

import aiohttp

from go_ipfs_dep import support
from go_ipfs_dep.config import resolve_parameters
from go_ipfs_dep.constants import ARCHIVE_ROOT
from go_ipfs_dep.errors import GoIpfsDepError, log_error
from go_ipfs_dep.extraction import extract
from go_ipfs_dep.fetching import fetch
from go_ipfs_dep.logging import get_logger, report
from go_ipfs_dep.types import (
    ArchiveFormat,
    ArtifactDescriptor,
    InstallResult,
    RequestParameters,
)

logger = get_logger(__name__)


def describe_artifact(params: RequestParameters) -> ArtifactDescriptor:
    """Derive the archive name and URL for a resolved request."""
    archive_format = support.archive_format(params.platform)
    file_name = f"ipfs_{params.version}_{params.platform}-{params.arch}{archive_format.extension}"
    url = f"{params.dist_url}/go-ipfs/{params.version}/go-{file_name}"
    return ArtifactDescriptor(file_name=file_name, url=url, archive_format=archive_format)


def display_name(file_name: str) -> str:
    """'ipfs_v0.4.5_linux-amd64.tar.gz' -> 'go-ipfs v0.4.5 linux-amd64'"""
    for archive_format in ArchiveFormat:
        file_name = file_name.removesuffix(archive_format.extension)
    return "go-" + file_name.replace("_", " ")


def installed(artifact: ArtifactDescriptor, install_path: Path) -> InstallResult:
    output_path = f"{install_path}/{ARCHIVE_ROOT}/"
    report(f"Downloaded {artifact.file_name}")
    report(f"Installed {display_name(artifact.file_name)} to {output_path}")
    return InstallResult(file=artifact.file_name, dir=output_path)


async def download(
    version: Optional[str] = None,
    platform: Optional[str] = None,
    arch: Optional[str] = None,
    install_path: Optional[str | os.PathLike] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstallResult:
    """Download a go-ipfs release and unpack it under install_path.

    TARGET_VERSION, TARGET_OS, TARGET_ARCH and GO_IPFS_DIST_URL override the
    arguments. Failures are reported on stdout and raised as GoIpfsDepError.
    """
    logger.debug({"event": "download_stage", "stage": "resolving"})
    params = resolve_parameters(version, platform, arch, install_path, environ)

    try:
        logger.debug({"event": "download_stage", "stage": "validating"})
        support.verify(params.version, params.platform, params.arch)
        artifact = describe_artifact(params)

        logger.debug({"event": "download_stage", "stage": "fetching", "url": artifact.url})
        async with fetch(artifact.url, session=session, timeout=timeout) as chunks:
            logger.debug({"event": "download_stage", "stage": "extracting"})
            await extract(chunks, params.install_path, artifact.archive_format)

    except GoIpfsDepError as e:
        log_error(e, {"version": params.version, "platform": params.platform, "arch": params.arch})
        report(str(e))
        report("Download failed!\n")
        raise

    logger.debug({"event": "download_stage", "stage": "done"})
    return installed(artifact, params.install_path)


download.versions = support.VERSIONS
download.platforms = support.PLATFORMS
download.archs = support.ARCHS

# Capitalized aliases
download.Versions = download.versions
download.Platforms = download.platforms
download.Archs = download.archs
download.Download = download
