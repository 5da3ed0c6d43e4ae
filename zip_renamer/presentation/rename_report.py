"""Rename plan tables for display and download."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from zip_renamer.domain.models import RenameDecision
from zip_renamer.domain.results import RenameReport

COLUMNS = ["original_path", "output_path", "identifier", "status"]


def decision_status(decision: RenameDecision) -> str:
    if decision.matched:
        return "renamed"
    if decision.identifier is None:
        return "no_identifier"
    return "unmatched"


def decisions_to_rows(decisions: Sequence[RenameDecision]) -> list[dict[str, str]]:
    return [
        {
            "original_path": d.original_path,
            "output_path": d.output_path,
            "identifier": d.identifier or "",
            "status": decision_status(d),
        }
        for d in decisions
    ]


def decisions_to_dataframe(decisions: Sequence[RenameDecision]) -> pd.DataFrame:
    return pd.DataFrame(decisions_to_rows(decisions), columns=COLUMNS, dtype=str)


def render_csv(decisions: Sequence[RenameDecision]) -> bytes:
    return decisions_to_dataframe(decisions).to_csv(index=False).encode("utf-8")


def render_html(report: RenameReport) -> str:
    """Summary line plus the full plan as an HTML table; paths are escaped."""
    if not report.decisions:
        return "<p>No files in the target archive.</p>"
    summary = report.summary
    heading = (
        f"<p>{summary.renamed} renamed, {summary.unmatched} unmatched, "
        f"{summary.without_identifier} without identifier of {summary.total_target_files} files.</p>"
    )
    return heading + decisions_to_dataframe(report.decisions).to_html(index=False, escape=True)
