"""Streamlit front-end for the ZIP rename pipeline."""
from __future__ import annotations

import asyncio
from typing import Sequence

import pandas as pd
import streamlit as st

from zip_renamer import PipelineCoordinator
from zip_renamer.application.dto import Failure, Success
from zip_renamer.config import SETTINGS
from zip_renamer.exceptions import InvalidArchiveError
from zip_renamer.logger import setup_logging
from zip_renamer.presentation.rename_report import decisions_to_dataframe, render_csv, render_html


st.set_page_config(page_title="ZIP Renamer", layout="wide")
st.title("ZIP Batch Renamer")
st.caption("Rename the files of a target ZIP after the files of a source ZIP that share their leading number.")

setup_logging(SETTINGS.log_level)

if "coordinator" not in st.session_state:
    st.session_state["coordinator"] = PipelineCoordinator()
coordinator: PipelineCoordinator = st.session_state["coordinator"]


def files_to_dataframe(paths: Sequence[str]) -> pd.DataFrame:
    return pd.DataFrame({"file": list(paths)}, columns=["file"])


def on_upload(label: str) -> None:
    uploaded = st.session_state.get(f"{label}_upload")
    select = coordinator.select_source if label == "source" else coordinator.select_target
    clear = coordinator.clear_source if label == "source" else coordinator.clear_target
    if uploaded is None:
        clear()
        return
    try:
        select(uploaded.name, uploaded.getvalue())
    except InvalidArchiveError:
        # The coordinator records the failure outcome shown below.
        pass


col1, col2 = st.columns(2)
with col1:
    st.subheader("1. Source ZIP (names)")
    st.file_uploader(
        "Upload source ZIP",
        type=list(SETTINGS.accepted_extensions),
        key="source_upload",
        on_change=on_upload,
        args=("source",),
    )
    if coordinator.source:
        st.caption(f"{len(coordinator.source.file_paths)} files")
        st.dataframe(files_to_dataframe(coordinator.source.file_paths), hide_index=True, use_container_width=True)
with col2:
    st.subheader("2. Target ZIP (renamed)")
    st.file_uploader(
        "Upload target ZIP",
        type=list(SETTINGS.accepted_extensions),
        key="target_upload",
        on_change=on_upload,
        args=("target",),
    )
    if coordinator.target:
        st.caption(f"{len(coordinator.target.file_paths)} files")
        st.dataframe(files_to_dataframe(coordinator.target.file_paths), hide_index=True, use_container_width=True)

run_btn = st.button("Rename and build ZIP", disabled=not coordinator.can_process)
if run_btn and coordinator.can_process:
    with st.spinner("Processing..."):
        asyncio.run(coordinator.process())

outcome = coordinator.outcome
if isinstance(outcome, Success):
    artifact = outcome.artifact
    summary = artifact.report.summary
    st.success("Renamed ZIP created successfully!")
    metrics = st.columns(4)
    metrics[0].metric("Target files", summary.total_target_files)
    metrics[1].metric("Renamed", summary.renamed)
    metrics[2].metric("Unmatched", summary.unmatched)
    metrics[3].metric("Without number", summary.without_identifier)
    if artifact.report.has_warnings():
        st.warning(
            f"{summary.duplicate_source_identifiers} duplicate source numbers, "
            f"{summary.colliding_output_paths} colliding output paths (the last file wins)."
        )
    st.download_button(
        "Download result",
        data=artifact.data,
        file_name=artifact.filename,
        mime="application/zip",
    )
    with st.expander("Rename preview", expanded=False):
        st.dataframe(decisions_to_dataframe(artifact.report.decisions), hide_index=True)
        st.download_button(
            "Download rename plan CSV",
            data=render_csv(artifact.report.decisions),
            file_name="rename_plan.csv",
            mime="text/csv",
        )
        st.download_button(
            "Download rename plan HTML",
            data=render_html(artifact.report).encode("utf-8"),
            file_name="rename_plan.html",
            mime="text/html",
        )
elif isinstance(outcome, Failure):
    st.error(outcome.message)
