"""In-memory ZIP codec built on :mod:`zipfile`."""
from __future__ import annotations

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass
from typing import Iterable, Sequence

from zip_renamer.config import SETTINGS, Settings
from zip_renamer.domain.models import ArchiveRecord, ResolvedEntry
from zip_renamer.domain.repositories import ArchiveCodec
from zip_renamer.exceptions import ContentReadError, EncodeError, InvalidArchiveError

logger = logging.getLogger(__name__)

_DECODE_ERRORS = (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, OSError, ValueError)
_UTF8_FLAG = 0x800


def member_name(info: zipfile.ZipInfo) -> str:
    """Return the entry name, reading unflagged names as UTF-8 when they are valid UTF-8.

    ``zipfile`` decodes names without the UTF-8 flag as cp437. Many archivers
    (macOS Archive Utility among them) store UTF-8 bytes without setting the
    flag, so the raw bytes are recovered and decoded again.
    """
    if info.flag_bits & _UTF8_FLAG:
        return info.filename
    try:
        return info.filename.encode("cp437").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return info.filename


@dataclass(frozen=True)
class ZipContentHandle:
    """Reads one member from the original archive bytes on demand.

    Every read opens its own ``ZipFile`` over the immutable input, so handles
    can be read from worker threads concurrently.
    """

    data: bytes
    member: zipfile.ZipInfo

    def read(self) -> bytes:
        try:
            with zipfile.ZipFile(io.BytesIO(self.data)) as archive:
                return archive.read(self.member)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, RuntimeError, NotImplementedError, ValueError) as exc:
            raise ContentReadError(
                f"Cannot read {self.member.filename!r}: {exc}", path=self.member.filename
            ) from exc


class ZipArchiveCodec(ArchiveCodec):
    def __init__(self, settings: Settings = SETTINGS) -> None:
        self._settings = settings

    def decode(self, data: bytes, label: str | None = None) -> Sequence[ArchiveRecord]:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                members = archive.infolist()
        except _DECODE_ERRORS as exc:
            raise InvalidArchiveError(f"Invalid ZIP file: {exc}", label=label) from exc

        records = [
            ArchiveRecord(path=member_name(member), is_directory=member.is_dir(), content=ZipContentHandle(data, member))
            for member in members
        ]
        logger.info(
            "Decoded %s archive: %d entries, %d files",
            label or "input",
            len(records),
            len([r for r in records if not r.is_directory]),
        )
        return records

    def encode(self, entries: Iterable[ResolvedEntry]) -> bytes:
        # A repeated path replaces the earlier content but keeps its first position.
        staged: dict[str, bytes] = {}
        for entry in entries:
            if entry.output_path in staged:
                logger.warning("Output path %s written twice; keeping the later entry", entry.output_path)
            staged[entry.output_path] = entry.content

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", self._settings.compression) as archive:
                for path, content in staged.items():
                    archive.writestr(path, content)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, MemoryError, ValueError, RuntimeError) as exc:
            raise EncodeError(f"Cannot build output archive: {exc}") from exc

        output = buffer.getvalue()
        logger.info("Encoded output archive: %d files, %d bytes", len(staged), len(output))
        return output


def read_archive(data: bytes, codec: ArchiveCodec | None = None, label: str | None = None) -> Sequence[ArchiveRecord]:
    return (codec or ZipArchiveCodec()).decode(data, label=label)


def write_archive(entries: Iterable[ResolvedEntry], codec: ArchiveCodec | None = None) -> bytes:
    return (codec or ZipArchiveCodec()).encode(entries)


def list_file_paths(records: Sequence[ArchiveRecord]) -> list[str]:
    return sorted(record.path for record in records if not record.is_directory)
