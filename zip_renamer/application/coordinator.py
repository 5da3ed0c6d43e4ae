"""Process-wide state for the two selected archives and the latest run."""
from __future__ import annotations

import itertools
import logging

from zip_renamer.application.dto import (
    ArchiveSelection,
    Failure,
    Idle,
    Outcome,
    Processing,
    RenameArtifact,
    Success,
)
from zip_renamer.application.use_cases import RenameArchivesUseCase, RenameContext
from zip_renamer.config import SETTINGS, Settings
from zip_renamer.domain.repositories import ArchiveCodec
from zip_renamer.exceptions import InvalidArchiveError, RenamerError
from zip_renamer.infrastructure.archive.zip_codec import ZipArchiveCodec, list_file_paths

logger = logging.getLogger(__name__)

STAGE_MESSAGES = {
    "read-source": "Could not read the source ZIP file",
    "read-target": "Could not read the target ZIP file",
    "resolve": "Could not read a file from the target ZIP",
    "encode": "Could not build the renamed ZIP file",
}


class PipelineCoordinator:
    """Holds the selected inputs and drives runs through Idle/Processing/Success/Failure.

    Each run takes a number from a monotonic counter. A run only settles the
    outcome if no newer run has started in the meantime.
    """

    def __init__(self, codec: ArchiveCodec | None = None, settings: Settings = SETTINGS) -> None:
        self._codec = codec or ZipArchiveCodec(settings)
        self._settings = settings
        self._use_case = RenameArchivesUseCase(RenameContext(codec=self._codec, settings=settings))
        self._run_counter = itertools.count(1)
        self._latest_run = 0
        self.source: ArchiveSelection | None = None
        self.target: ArchiveSelection | None = None
        self.outcome: Outcome = Idle()

    @property
    def can_process(self) -> bool:
        return self.source is not None and self.target is not None

    @property
    def artifact(self) -> RenameArtifact | None:
        return self.outcome.artifact if isinstance(self.outcome, Success) else None

    def select_source(self, name: str, data: bytes) -> ArchiveSelection:
        self.source = None
        self.source = self._select("source", name, data)
        return self.source

    def select_target(self, name: str, data: bytes) -> ArchiveSelection:
        self.target = None
        self.target = self._select("target", name, data)
        return self.target

    def clear_source(self) -> None:
        self._reset()
        self.source = None

    def clear_target(self) -> None:
        self._reset()
        self.target = None

    def _select(self, label: str, name: str, data: bytes) -> ArchiveSelection:
        self._reset()
        try:
            records = self._codec.decode(data, label=label)
        except InvalidArchiveError as exc:
            logger.error("Rejected %s archive %s: %s", label, name, exc)
            self.outcome = Failure(message="Invalid ZIP file.", stage=exc.stage)
            raise
        return ArchiveSelection(name=name, data=data, file_paths=list_file_paths(records))

    def _reset(self) -> None:
        # Any change of input invalidates in-flight runs and drops the held artifact.
        self._latest_run = next(self._run_counter)
        self.outcome = Idle()

    async def process(self) -> Outcome:
        if self.source is None or self.target is None:
            return self.outcome

        run_id = next(self._run_counter)
        self._latest_run = run_id
        source, target = self.source, self.target
        self.outcome = Processing(run_id=run_id)
        logger.info("Run %d started: %s -> %s", run_id, source.name, target.name)

        try:
            result = await self._use_case.execute(source.data, target.data)
        except RenamerError as exc:
            settled: Outcome = Failure(
                message=f"{STAGE_MESSAGES.get(exc.stage, 'Processing failed')}: {exc}",
                stage=exc.stage,
            )
            logger.error("Run %d failed at %s: %s", run_id, exc.stage, exc)
        except Exception as exc:
            # Unexpected errors still settle the run before propagating.
            logger.exception("Run %d failed unexpectedly", run_id)
            if run_id == self._latest_run:
                self.outcome = Failure(message=f"Processing failed: {exc}", stage=RenamerError.stage)
            raise
        else:
            settled = Success(
                artifact=RenameArtifact(
                    filename=self._settings.output_filename(target.name),
                    data=result.data,
                    report=result.report,
                )
            )
            logger.info("Run %d produced %s", run_id, settled.artifact.filename)

        if run_id != self._latest_run:
            logger.info("Discarding result of stale run %d (latest is %d)", run_id, self._latest_run)
            return self.outcome

        self.outcome = settled
        return settled
