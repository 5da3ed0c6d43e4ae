"""Central configuration for the ZIP renamer package."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Settings:
    output_prefix: str
    output_suffix: str
    fallback_name: str
    compression: int
    max_concurrent_reads: int
    accepted_extensions: tuple[str, ...]
    log_level: str

    def output_filename(self, target_name: str | None) -> str:
        return f"{self.output_prefix}{target_name or self.fallback_name}{self.output_suffix}"


SETTINGS = Settings(
    output_prefix="renamed_",
    output_suffix=".zip",
    fallback_name="files",
    compression=zipfile.ZIP_DEFLATED,
    max_concurrent_reads=8,
    accepted_extensions=("zip",),
    log_level="INFO",
)
