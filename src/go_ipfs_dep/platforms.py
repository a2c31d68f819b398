"""Host platform detection using Go's GOOS/GOARCH naming."""
import platform
import sys

# sys.platform prefixes mapped to GOOS
PLATFORM_MAPPINGS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}

# platform.machine() values mapped to GOARCH
ARCH_MAPPINGS = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm": "arm",
}


def current_platform() -> str:
    """Get the GOOS name of the running interpreter's platform."""
    for prefix, goos in PLATFORM_MAPPINGS.items():
        if sys.platform.startswith(prefix):
            return goos
    return sys.platform


def current_arch() -> str:
    """Get the GOARCH name of the host machine."""
    machine = platform.machine().lower()
    return ARCH_MAPPINGS.get(machine, machine)
