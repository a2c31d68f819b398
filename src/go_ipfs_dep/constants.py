"""Release catalog, package defaults and environment variable names."""

PACKAGE_VERSION = "0.4.23"

# Defaults a packager may pin; a missing "version" falls back to PACKAGE_VERSION
PACKAGE_DEFAULTS = {
    "dist_url": "https://dist.ipfs.io",
}

# Environment overrides
ENV_VERSION = "TARGET_VERSION"
ENV_PLATFORM = "TARGET_OS"
ENV_ARCH = "TARGET_ARCH"
ENV_DIST_URL = "GO_IPFS_DIST_URL"

VERSIONS = (
    "v0.4.0",
    "v0.4.1",
    "v0.4.2",
    "v0.4.3",
    "v0.4.4",
    "v0.4.5",
    "v0.4.6",
    "v0.4.7",
    "v0.4.8",
    "v0.4.9",
    "v0.4.10",
    "v0.4.11",
    "v0.4.12",
    "v0.4.13",
    "v0.4.14",
    "v0.4.15",
    "v0.4.16",
    "v0.4.17",
    "v0.4.18",
    "v0.4.19",
    "v0.4.20",
    "v0.4.21",
    "v0.4.22",
    "v0.4.23",
)

PLATFORMS = ("darwin", "freebsd", "linux", "windows")

ARCHS = ("386", "amd64", "arm", "arm64")

# Release archives unpack into this directory
ARCHIVE_ROOT = "go-ipfs"

CHUNK_SIZE = 8192

# Bodies larger than this are spooled to disk before extraction
SPOOL_MAX_SIZE = 16 * 1024 * 1024
