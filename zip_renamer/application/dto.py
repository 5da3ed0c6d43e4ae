"""Application-level DTOs and the pipeline outcome variants."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

from zip_renamer.domain.results import RenameReport


@dataclass(slots=True, frozen=True)
class ArchiveSelection:
    name: str
    data: bytes = field(repr=False)
    file_paths: Sequence[str]


@dataclass(slots=True, frozen=True)
class RenameResult:
    data: bytes = field(repr=False)
    report: RenameReport


@dataclass(slots=True, frozen=True)
class RenameArtifact:
    filename: str
    data: bytes = field(repr=False)
    report: RenameReport


@dataclass(slots=True, frozen=True)
class Idle:
    pass


@dataclass(slots=True, frozen=True)
class Processing:
    run_id: int


@dataclass(slots=True, frozen=True)
class Success:
    artifact: RenameArtifact


@dataclass(slots=True, frozen=True)
class Failure:
    message: str
    stage: str


Outcome = Union[Idle, Processing, Success, Failure]
