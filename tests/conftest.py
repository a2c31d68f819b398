import io
import struct
import tarfile
import zipfile
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from go_ipfs_dep.constants import ENV_ARCH, ENV_DIST_URL, ENV_PLATFORM, ENV_VERSION

ARCHIVE_FILES = {
    "go-ipfs/ipfs": b"#!/bin/sh\necho ipfs\n",
    "go-ipfs/README.md": b"go-ipfs release\n",
}


def make_tar(files: Dict[str, bytes], mode: str = "w:gz") -> bytes:
    """Build an in-memory tar archive."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode=mode) as tf:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(content))
    return buf.getvalue()


def make_zip(files: Dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buf.getvalue()


def patch_zip_entries(
    data: bytes, flag_bits: Optional[int] = None, method: Optional[int] = None
) -> bytes:
    """Rewrite the flag bits or compression method of every central directory entry."""
    patched = bytearray(data)
    offset = patched.find(b"PK\x01\x02")
    while offset != -1:
        if flag_bits is not None:
            struct.pack_into("<H", patched, offset + 8, flag_bits)
        if method is not None:
            struct.pack_into("<H", patched, offset + 10, method)
        offset = patched.find(b"PK\x01\x02", offset + 4)
    return bytes(patched)


@dataclass
class DistServer:
    """Local distribution server serving canned responses by path"""
    url: str
    routes: Dict[str, Tuple[int, bytes]] = field(default_factory=dict)
    requests: List[str] = field(default_factory=list)
    handlers: Dict[str, Callable[[web.Request], Awaitable[web.StreamResponse]]] = field(default_factory=dict)

    def serve(self, path: str, body: bytes, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def serve_with(self, path: str, handler: Callable[[web.Request], Awaitable[web.StreamResponse]]) -> None:
        self.handlers[path] = handler


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment from overriding test parameters"""
    for name in (ENV_VERSION, ENV_PLATFORM, ENV_ARCH, ENV_DIST_URL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tar_gz_archive() -> bytes:
    return make_tar(ARCHIVE_FILES)


@pytest.fixture
def plain_tar_archive() -> bytes:
    return make_tar(ARCHIVE_FILES, mode="w")


@pytest.fixture
def zip_archive() -> bytes:
    return make_zip(ARCHIVE_FILES)


@pytest_asyncio.fixture
async def dist_server():
    """Run a real HTTP server standing in for dist.ipfs.io"""
    state = DistServer(url="")

    async def handler(request: web.Request) -> web.Response:
        state.requests.append(request.path)
        if request.path in state.handlers:
            return await state.handlers[request.path](request)
        status, body = state.routes.get(request.path, (404, b"404 page not found"))
        return web.Response(status=status, body=body)

    app = web.Application()
    app.router.add_get("/{tail:.*}", handler)

    server = TestServer(app)
    await server.start_server()
    state.url = f"http://{server.host}:{server.port}"
    try:
        yield state
    finally:
        await server.close()
