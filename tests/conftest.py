"""Test configuration: stable temp directory on WSL and tarball builders."""

from __future__ import annotations

import io
import os
import platform
import tarfile
import tempfile
from typing import Dict, Iterable, Optional, Tuple, Union

import pytest


def _is_wsl() -> bool:
    release = platform.release().lower()
    version = platform.version().lower()
    return "microsoft" in release or "microsoft" in version


if _is_wsl() and os.path.isdir("/tmp"):
    os.environ["TMPDIR"] = "/tmp"
    os.environ["TEMP"] = "/tmp"
    os.environ["TMP"] = "/tmp"
    tempfile.tempdir = "/tmp"


# (name, payload, mode): payload None is a directory, str is a symlink target,
# bytes is regular file content.
Entry = Tuple[str, Union[bytes, str, None], int]


def build_tarball(
    entries: Iterable[Entry],
    global_header: Optional[Dict[str, str]] = None,
    compress: bool = True,
) -> bytes:
    buf = io.BytesIO()
    options = {}
    if global_header is not None:
        options = {"format": tarfile.PAX_FORMAT, "pax_headers": global_header}
    with tarfile.open(fileobj=buf, mode="w:gz" if compress else "w", **options) as tar:
        for name, payload, mode in entries:
            info = tarfile.TarInfo(name)
            info.mode = mode
            if payload is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            elif isinstance(payload, str):
                info.type = tarfile.SYMTYPE
                info.linkname = payload
                tar.addfile(info)
            else:
                info.size = len(payload)
                tar.addfile(info, io.BytesIO(payload))
    return buf.getvalue()


@pytest.fixture
def make_tarball():
    return build_tarball


@pytest.fixture
def git_archive_entries():
    """Entries laid out the way `git archive --prefix=topdir/` writes them."""
    return [
        ("topdir/", None, 0o775),
        ("topdir/a.txt", b"alpha\n", 0o644),
        ("topdir/sub/", None, 0o775),
        ("topdir/sub/b.txt", b"beta\n", 0o755),
    ]


@pytest.fixture
def serve_file(tmp_path):
    """Write bytes to disk and return a file:// URL for them."""
    def _serve(data: bytes, name: str = "archive.tar.gz") -> str:
        path = tmp_path / "served" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path.as_uri()
    return _serve
