import gzip
import io

import pytest

from go_ipfs_dep.errors import ExtractionError
from go_ipfs_dep.extraction import extract, maybe_gunzip
from go_ipfs_dep.types import ArchiveFormat

from conftest import ARCHIVE_FILES, make_tar, make_zip, patch_zip_entries


async def stream(data: bytes, size: int = 1000):
    for i in range(0, len(data), size):
        yield data[i:i + size]


def assert_installed(dest):
    for name, content in ARCHIVE_FILES.items():
        assert (dest / name).read_bytes() == content


def test_maybe_gunzip_decompresses_gzip():
    raw = io.BytesIO(gzip.compress(b"payload"))
    assert maybe_gunzip(raw).read() == b"payload"


def test_maybe_gunzip_passes_through_plain_input():
    """Test non-gzip input is returned unchanged and rewound"""
    raw = io.BytesIO(b"plain payload")
    result = maybe_gunzip(raw)
    assert result is raw
    assert result.read() == b"plain payload"


@pytest.mark.asyncio
async def test_extract_tar_gz(tmp_path, tar_gz_archive):
    await extract(stream(tar_gz_archive), tmp_path, ArchiveFormat.TAR_GZ)
    assert_installed(tmp_path)


@pytest.mark.asyncio
async def test_extract_uncompressed_tar(tmp_path, plain_tar_archive):
    """Test a tar body that was never gzipped still extracts"""
    await extract(stream(plain_tar_archive), tmp_path, ArchiveFormat.TAR_GZ)
    assert_installed(tmp_path)


@pytest.mark.asyncio
async def test_extract_zip(tmp_path, zip_archive):
    await extract(stream(zip_archive), tmp_path, ArchiveFormat.ZIP)
    assert_installed(tmp_path)


@pytest.mark.asyncio
async def test_extract_creates_install_path(tmp_path, tar_gz_archive):
    dest = tmp_path / "nested" / "out"
    await extract(stream(tar_gz_archive), dest, ArchiveFormat.TAR_GZ)
    assert_installed(dest)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "archive_format,body",
    [
        (ArchiveFormat.ZIP, b"this is not a zip file"),
        (ArchiveFormat.TAR_GZ, b"this is not a tarball"),
        (ArchiveFormat.TAR_GZ, gzip.compress(b"gzipped but not a tarball" * 40)),
        (ArchiveFormat.TAR_GZ, b"\x1f\x8b" + b"\x00" * 64),
        # Encrypted members
        (ArchiveFormat.ZIP, patch_zip_entries(make_zip(ARCHIVE_FILES), flag_bits=0x1)),
        # Unknown compression method
        (ArchiveFormat.ZIP, patch_zip_entries(make_zip(ARCHIVE_FILES), method=99)),
    ],
)
async def test_extract_corrupt_archive(tmp_path, archive_format, body):
    """Test malformed archives raise ExtractionError"""
    with pytest.raises(ExtractionError) as exc_info:
        await extract(stream(body), tmp_path, archive_format)

    assert exc_info.value.details["format"] == archive_format.name


@pytest.mark.asyncio
async def test_extract_rejects_escaping_members(tmp_path):
    """Test tar members cannot be written outside the install path"""
    body = make_tar({"../escape.txt": b"nope"})
    dest = tmp_path / "out"

    with pytest.raises(ExtractionError):
        await extract(stream(body), dest, ArchiveFormat.TAR_GZ)

    assert not (tmp_path / "escape.txt").exists()
