"""Domain services implementing the matching and rename rules."""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Mapping, Sequence

from .identifiers import extract_identifier
from .models import ArchiveRecord, Identifier, RenameDecision, ResolvedEntry, SourceIndex
from .results import RenameReport, RenameSummary

logger = logging.getLogger(__name__)


def build_index(records: Sequence[ArchiveRecord]) -> SourceIndex:
    """Map each identifier to the full path of the last source file carrying it."""
    index: SourceIndex = {}
    for record in records:
        if record.is_directory:
            continue
        identifier = extract_identifier(record.path)
        if identifier is not None:
            index[identifier] = record.path
    logger.debug("Built source index with %d identifiers", len(index))
    return index


def find_duplicate_identifiers(records: Sequence[ArchiveRecord]) -> Mapping[Identifier, list[str]]:
    paths: dict[Identifier, list[str]] = defaultdict(list)
    for record in records:
        if record.is_directory:
            continue
        identifier = extract_identifier(record.path)
        if identifier is not None:
            paths[identifier].append(record.path)
    return {identifier: found for identifier, found in paths.items() if len(found) > 1}


class RenameResolver:
    """Resolves the output path of every target file against a source index."""

    def __init__(self, index: SourceIndex, max_concurrent_reads: int | None = None) -> None:
        self._index = index
        self._max_concurrent_reads = max_concurrent_reads

    def output_path(self, path: str) -> str:
        identifier = extract_identifier(path)
        if identifier is not None and identifier in self._index:
            return self._index[identifier]
        return path

    def plan(self, records: Sequence[ArchiveRecord]) -> list[RenameDecision]:
        decisions: list[RenameDecision] = []
        for record in records:
            if record.is_directory:
                continue
            identifier = extract_identifier(record.path)
            matched = identifier is not None and identifier in self._index
            decisions.append(
                RenameDecision(
                    original_path=record.path,
                    output_path=self._index[identifier] if matched else record.path,
                    identifier=identifier,
                    matched=matched,
                )
            )
        return decisions

    def resolve(self, records: Sequence[ArchiveRecord]) -> list[ResolvedEntry]:
        return [
            ResolvedEntry(output_path=self.output_path(record.path), content=record.content.read())
            for record in records
            if not record.is_directory
        ]

    async def resolve_async(self, records: Sequence[ArchiveRecord]) -> list[ResolvedEntry]:
        """Read all target contents concurrently and emit entries in target order.

        Results land in a list addressed by position, never appended on
        completion, so duplicate output paths keep their target order. The
        first read failure propagates and no entries are returned.
        """
        files = [record for record in records if not record.is_directory]
        resolved: list[ResolvedEntry | None] = [None] * len(files)
        semaphore = asyncio.Semaphore(self._max_concurrent_reads) if self._max_concurrent_reads else None

        async def materialise(position: int, record: ArchiveRecord) -> None:
            if semaphore is None:
                content = await asyncio.to_thread(record.content.read)
            else:
                async with semaphore:
                    content = await asyncio.to_thread(record.content.read)
            resolved[position] = ResolvedEntry(output_path=self.output_path(record.path), content=content)

        await asyncio.gather(*(materialise(position, record) for position, record in enumerate(files)))
        return [entry for entry in resolved if entry is not None]


def summarize(
    decisions: Sequence[RenameDecision],
    source_records: Sequence[ArchiveRecord],
) -> RenameReport:
    duplicates = find_duplicate_identifiers(source_records)

    by_output: dict[str, list[str]] = defaultdict(list)
    for decision in decisions:
        by_output[decision.output_path].append(decision.original_path)
    collisions = {path: originals for path, originals in by_output.items() if len(originals) > 1}

    summary = RenameSummary(
        total_target_files=len(decisions),
        renamed=len([d for d in decisions if d.matched]),
        unmatched=len([d for d in decisions if not d.matched and d.identifier is not None]),
        without_identifier=len([d for d in decisions if d.identifier is None]),
        duplicate_source_identifiers=len(duplicates),
        colliding_output_paths=len(collisions),
        generated_at=datetime.now(timezone.utc),
    )
    return RenameReport(
        summary=summary,
        decisions=tuple(decisions),
        duplicate_identifiers=duplicates,
        collisions=collisions,
    )
