"""Archive extraction into the install directory."""
import asyncio
import gzip
import tarfile
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import IO, AsyncIterable, Callable, Dict

from go_ipfs_dep.constants import SPOOL_MAX_SIZE
from go_ipfs_dep.errors import ExtractionError
from go_ipfs_dep.logging import get_logger
from go_ipfs_dep.types import ArchiveFormat

logger = get_logger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def maybe_gunzip(fileobj: IO[bytes]) -> IO[bytes]:
    """Wrap gzip input in a decompressor, pass anything else through."""
    magic = fileobj.read(len(GZIP_MAGIC))
    fileobj.seek(0)
    if magic == GZIP_MAGIC:
        return gzip.GzipFile(fileobj=fileobj, mode="rb")
    logger.debug({"event": "gzip_passthrough"})
    return fileobj


def extract_zip(fileobj: IO[bytes], dest_dir: Path) -> None:
    with zipfile.ZipFile(fileobj) as archive:
        archive.extractall(dest_dir)


def extract_tar_gz(fileobj: IO[bytes], dest_dir: Path) -> None:
    with tarfile.open(fileobj=maybe_gunzip(fileobj), mode="r|") as archive:
        archive.extractall(dest_dir, filter="data")


EXTRACTORS: Dict[ArchiveFormat, Callable[[IO[bytes], Path], None]] = {
    ArchiveFormat.ZIP: extract_zip,
    ArchiveFormat.TAR_GZ: extract_tar_gz,
}

# Raised by zipfile, tarfile and gzip on malformed or unwritable input
ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    tarfile.TarError,
    gzip.BadGzipFile,
    zlib.error,
    EOFError,
    OSError,
    ValueError,
    # zipfile: encrypted members, unknown compression methods
    RuntimeError,
    NotImplementedError,
)


async def extract(
    chunks: AsyncIterable[bytes],
    install_path: Path,
    archive_format: ArchiveFormat,
) -> None:
    """Unpack a streamed archive under install_path.

    The body is spooled first, memory then disk, so the blocking archive
    readers can run in a worker thread once the download has completed.
    """
    handler = EXTRACTORS[archive_format]

    with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_SIZE) as spool:
        async for chunk in chunks:
            spool.write(chunk)
        spool.seek(0)

        logger.debug(
            {
                "event": "extract_archive",
                "format": archive_format.name,
                "dest": str(install_path),
            }
        )

        try:
            install_path.mkdir(parents=True, exist_ok=True)
            await asyncio.to_thread(handler, spool, install_path)
        except ARCHIVE_ERRORS as e:
            logger.error(
                {
                    "event": "extract_failed",
                    "format": archive_format.name,
                    "dest": str(install_path),
                    "error": str(e),
                }
            )
            raise ExtractionError(str(install_path), archive_format.name, str(e)) from e

    logger.info(
        {
            "event": "archive_extracted",
            "format": archive_format.name,
            "extracted_to": str(install_path),
        }
    )
