"""Rename files in a target ZIP after their numbered counterparts in a source ZIP."""
from zip_renamer.application.coordinator import PipelineCoordinator
from zip_renamer.application.use_cases import RenameArchivesUseCase, RenameContext
from zip_renamer.domain.identifiers import extract_identifier
from zip_renamer.domain.services import RenameResolver, build_index
from zip_renamer.infrastructure.archive.zip_codec import ZipArchiveCodec, read_archive, write_archive

__all__ = [
    "PipelineCoordinator",
    "RenameArchivesUseCase",
    "RenameContext",
    "RenameResolver",
    "ZipArchiveCodec",
    "build_index",
    "extract_identifier",
    "read_archive",
    "write_archive",
]
