"""Command line entry point."""
import argparse
import asyncio
import sys
from typing import List, Optional

from go_ipfs_dep.errors import GoIpfsDepError
from go_ipfs_dep.installer import download
from go_ipfs_dep.logging import configure_logging
from go_ipfs_dep.support import ARCHS, PLATFORMS, VERSIONS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go-ipfs-dep",
        description="Download a go-ipfs release and unpack it into a directory.",
    )
    parser.add_argument("install_path", nargs="?", help="Target directory (default: cwd)")
    parser.add_argument("--version", dest="go_ipfs_version", help="go-ipfs version, e.g. v0.4.5")
    parser.add_argument("--os", dest="platform", help="Target platform, e.g. linux")
    parser.add_argument("--arch", help="Target architecture, e.g. amd64")
    parser.add_argument(
        "--timeout", type=float, help="Give up after this many seconds (default: never)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument(
        "--list", action="store_true", help="List supported versions, platforms and architectures"
    )
    return parser


def print_catalog() -> None:
    print(f"Versions: {', '.join(VERSIONS)}")
    print(f"Platforms: {', '.join(PLATFORMS)}")
    print(f"Architectures: {', '.join(ARCHS)}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list:
        print_catalog()
        return 0

    configure_logging(args.log_level)

    try:
        asyncio.run(
            download(
                args.go_ipfs_version,
                args.platform,
                args.arch,
                args.install_path,
                timeout=args.timeout,
            )
        )
    except GoIpfsDepError:
        # Already reported by download()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
