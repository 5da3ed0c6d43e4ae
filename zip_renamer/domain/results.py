"""Domain-level results for a rename run."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Mapping, Sequence

from .models import Identifier, RenameDecision


@dataclass(frozen=True)
class RenameSummary:
    total_target_files: int
    renamed: int
    unmatched: int
    without_identifier: int
    duplicate_source_identifiers: int
    colliding_output_paths: int
    generated_at: datetime


@dataclass(frozen=True)
class RenameReport:
    summary: RenameSummary
    decisions: Sequence[RenameDecision] = field(default_factory=tuple)
    duplicate_identifiers: Mapping[Identifier, Sequence[str]] = field(default_factory=dict)
    collisions: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def has_warnings(self) -> bool:
        return any(
            [
                self.summary.duplicate_source_identifiers,
                self.summary.colliding_output_paths,
            ]
        )

    def iter_matched(self) -> Iterable[RenameDecision]:
        return (d for d in self.decisions if d.matched)

    def iter_unmatched(self) -> Iterable[RenameDecision]:
        return (d for d in self.decisions if not d.matched)
