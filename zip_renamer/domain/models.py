"""Domain models for the archive rename pipeline.

Records and resolved entries live for a single run only; they are dropped
once the output archive has been produced or the run has failed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

Identifier = str
SourceIndex = dict[Identifier, str]


class ContentHandle(Protocol):
    """Lazily materialises the bytes of one archive entry."""

    def read(self) -> bytes:
        ...


@dataclass(frozen=True)
class ArchiveRecord:
    """One entry of a decoded archive, in the archive's native order."""

    path: str
    is_directory: bool
    content: ContentHandle


@dataclass(frozen=True)
class ResolvedEntry:
    """A target file paired with the path it gets in the output archive."""

    output_path: str
    content: bytes


@dataclass(frozen=True)
class RenameDecision:
    original_path: str
    output_path: str
    identifier: Identifier | None
    matched: bool

    @property
    def renamed(self) -> bool:
        return self.output_path != self.original_path
