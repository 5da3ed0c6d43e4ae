import io
import zipfile
from dataclasses import dataclass
from typing import Iterable

import pytest

from zip_renamer.domain.models import ArchiveRecord


@dataclass(frozen=True)
class BytesContent:
    """Content handle over bytes that are already in memory."""

    data: bytes

    def read(self) -> bytes:
        return self.data


def build_zip(entries: Iterable[tuple[str, bytes | None]]) -> bytes:
    """Build a ZIP in memory; a ``None`` content marks a directory entry."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries:
            if content is None:
                archive.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                archive.writestr(name, content)
    return buffer.getvalue()


def build_unflagged_utf8_zip(entries: Iterable[tuple[str, bytes]]) -> bytes:
    """Build a ZIP whose names are raw UTF-8 bytes without the UTF-8 flag bit.

    ``zipfile`` always flags non-ASCII names, so each entry is written under an
    ASCII placeholder of the same byte length which is then patched in both
    the local and the central headers.
    """
    entries = list(entries)
    placeholders = []
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as archive:
        for position, (name, content) in enumerate(entries):
            raw = name.encode("utf-8")
            placeholder = f"@{position}@".ljust(len(raw), "#").encode("ascii")
            placeholders.append((placeholder, raw))
            archive.writestr(placeholder.decode("ascii"), content)
    data = buffer.getvalue()
    for placeholder, raw in placeholders:
        assert data.count(placeholder) == 2
        data = data.replace(placeholder, raw)
    return data


def read_zip(data: bytes) -> dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {info.filename: archive.read(info) for info in archive.infolist() if not info.is_dir()}


def make_record(path: str, content: bytes = b"", is_directory: bool = False) -> ArchiveRecord:
    return ArchiveRecord(path=path, is_directory=is_directory, content=BytesContent(content))


@pytest.fixture
def source_zip() -> bytes:
    return build_zip([("001_intro.pdf", b"source-intro"), ("002_body.pdf", b"source-body")])


@pytest.fixture
def target_zip() -> bytes:
    return build_zip([("001_x.pdf", b"x-bytes"), ("002_y.pdf", b"y-bytes"), ("003_z.pdf", b"z-bytes")])
