"""Request parameter resolution from environment, arguments and defaults."""
import os
import re
from pathlib import Path
from typing import Mapping, Optional

from go_ipfs_dep.constants import (
    ENV_ARCH,
    ENV_DIST_URL,
    ENV_PLATFORM,
    ENV_VERSION,
    PACKAGE_DEFAULTS,
    PACKAGE_VERSION,
)
from go_ipfs_dep.logging import get_logger
from go_ipfs_dep.platforms import current_arch, current_platform
from go_ipfs_dep.types import DistConfig, RequestParameters

logger = get_logger(__name__)

RELEASE_SUFFIX = re.compile(r"(-|\.post)[0-9]+")


def resolve(*candidates: Optional[str]) -> Optional[str]:
    """Return the first candidate that is set, in precedence order."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def default_version(
    defaults: Mapping[str, str] = PACKAGE_DEFAULTS,
    package_version: str = PACKAGE_VERSION,
) -> str:
    """Pinned default version, or this package's own version as a go-ipfs tag."""
    if defaults.get("version"):
        return defaults["version"]
    return "v" + RELEASE_SUFFIX.sub("", package_version)


def load_dist_config(
    environ: Optional[Mapping[str, str]] = None,
    defaults: Mapping[str, str] = PACKAGE_DEFAULTS,
) -> DistConfig:
    """Build the distribution config for one invocation."""
    environ = os.environ if environ is None else environ
    dist_url = resolve(environ.get(ENV_DIST_URL), defaults.get("dist_url"))
    return DistConfig(dist_url=dist_url.rstrip("/"))


def resolve_parameters(
    version: Optional[str] = None,
    platform: Optional[str] = None,
    arch: Optional[str] = None,
    install_path: Optional[str | os.PathLike] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RequestParameters:
    """Apply env > argument > default precedence to every request field."""
    environ = os.environ if environ is None else environ
    config = load_dist_config(environ)

    params = RequestParameters(
        version=resolve(environ.get(ENV_VERSION), version, default_version()),
        platform=resolve(environ.get(ENV_PLATFORM), platform, current_platform()),
        arch=resolve(environ.get(ENV_ARCH), arch, current_arch()),
        install_path=Path(os.path.abspath(install_path or os.getcwd())),
        dist_url=config.dist_url,
    )

    logger.debug(
        {
            "event": "parameters_resolved",
            "version": params.version,
            "platform": params.platform,
            "arch": params.arch,
            "install_path": str(params.install_path),
            "dist_url": params.dist_url,
        }
    )

    return params
