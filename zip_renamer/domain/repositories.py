"""Codec interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .models import ArchiveRecord, ResolvedEntry


class ArchiveCodec(Protocol):
    """Decodes archive bytes into records and encodes resolved entries back."""

    def decode(self, data: bytes, label: str | None = None) -> Sequence[ArchiveRecord]:
        ...

    def encode(self, entries: Iterable[ResolvedEntry]) -> bytes:
        ...
