"""Command-line entrypoint for renaming a target ZIP after a source ZIP."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from zip_renamer.application.use_cases import RenameArchivesUseCase, RenameContext
from zip_renamer.config import SETTINGS
from zip_renamer.domain.results import RenameSummary
from zip_renamer.domain.services import RenameResolver, build_index, summarize
from zip_renamer.exceptions import InvalidArchiveError, RenamerError
from zip_renamer.infrastructure.archive.zip_codec import ZipArchiveCodec, read_archive
from zip_renamer.logger import setup_logging


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rename files in TARGET after the source files in SOURCE that share their leading number"
    )
    parser.add_argument("source", type=Path, help="ZIP whose file names are used")
    parser.add_argument("target", type=Path, help="ZIP whose files are renamed")
    parser.add_argument("-o", "--output", type=Path, help="Output path (default: renamed_<target name>.zip)")
    parser.add_argument("--dry-run", action="store_true", help="Print the rename plan without writing a ZIP")
    parser.add_argument("--log-level", default=SETTINGS.log_level, help="Logging level (default: %(default)s)")
    return parser.parse_args(argv)


def print_plan(source_bytes: bytes, target_bytes: bytes) -> None:
    source_records = read_archive(source_bytes, label="source")
    target_records = read_archive(target_bytes, label="target")
    decisions = RenameResolver(build_index(source_records)).plan(target_records)
    for decision in decisions:
        marker = "->" if decision.matched else "=="
        print(f"{decision.original_path} {marker} {decision.output_path}")
    print_summary(summarize(decisions, source_records).summary)


def print_summary(summary: RenameSummary) -> None:
    print("Rename Summary")
    print("==============")
    print(f"Target files: {summary.total_target_files}")
    print(f"Renamed: {summary.renamed}")
    print(f"Unmatched: {summary.unmatched}")
    print(f"Without identifier: {summary.without_identifier}")
    print(f"Duplicate source identifiers: {summary.duplicate_source_identifiers}")
    print(f"Colliding output paths: {summary.colliding_output_paths}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.log_level.upper())

    source_bytes = args.source.read_bytes()
    target_bytes = args.target.read_bytes()

    try:
        if args.dry_run:
            print_plan(source_bytes, target_bytes)
            return 0
        use_case = RenameArchivesUseCase(RenameContext(codec=ZipArchiveCodec()))
        result = use_case.execute_sync(source_bytes, target_bytes)
    except InvalidArchiveError as exc:
        print(f"Invalid ZIP file ({exc.label}): {exc}", file=sys.stderr)
        return 1
    except RenamerError as exc:
        print(f"Failed during {exc.stage}: {exc}", file=sys.stderr)
        return 2

    output = args.output or args.target.with_name(SETTINGS.output_filename(args.target.name))
    output.write_bytes(result.data)

    print_summary(result.report.summary)
    print(f"\nWrote {output}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
