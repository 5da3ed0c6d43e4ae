"""Application services orchestrating the rename workflow."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from zip_renamer.application.dto import RenameResult
from zip_renamer.config import SETTINGS, Settings
from zip_renamer.domain.repositories import ArchiveCodec
from zip_renamer.domain.services import RenameResolver, build_index, summarize

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RenameContext:
    codec: ArchiveCodec
    settings: Settings = SETTINGS


class RenameArchivesUseCase:
    def __init__(self, context: RenameContext) -> None:
        self._context = context

    async def execute(self, source_bytes: bytes, target_bytes: bytes) -> RenameResult:
        codec = self._context.codec
        source_records, target_records = await asyncio.gather(
            asyncio.to_thread(codec.decode, source_bytes, "source"),
            asyncio.to_thread(codec.decode, target_bytes, "target"),
        )

        index = build_index(source_records)
        resolver = RenameResolver(index, max_concurrent_reads=self._context.settings.max_concurrent_reads)
        decisions = resolver.plan(target_records)
        report = summarize(decisions, source_records)
        for identifier, paths in report.duplicate_identifiers.items():
            logger.warning("Identifier %s appears on %d source files; using %s", identifier, len(paths), paths[-1])
        logger.info(
            "Resolved %d target files: %d renamed, %d unmatched, %d without identifier",
            report.summary.total_target_files,
            report.summary.renamed,
            report.summary.unmatched,
            report.summary.without_identifier,
        )

        entries = await resolver.resolve_async(target_records)
        data = await asyncio.to_thread(codec.encode, entries)
        return RenameResult(data=data, report=report)

    def execute_sync(self, source_bytes: bytes, target_bytes: bytes) -> RenameResult:
        return asyncio.run(self.execute(source_bytes, target_bytes))
