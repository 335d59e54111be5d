# interface/components/upload_rnaseq.py
"""Upload widgets, processing and output for sample and count files.

The three entry points share an ``id`` used to namespace widget and state keys,
so the same id must be passed to each of them.
"""

import dataclasses
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
import streamlit as st

from rnaseq_pipeline.loaders import (
    bundled_data_paths,
    get_gene_metadata,
    load_rnaseq_data,
    load_rnaseq_samples,
    separator_for,
)
from rnaseq_pipeline.processor import get_normalised_counts
from rnaseq_pipeline.reconcile import COUNTS_ANCHOR, LINE_BREAK, SAMPLE_ANCHOR, reconcile_samples_and_counts
from rnaseq_pipeline.types import Alert
from rnaseq_pipeline.validators import validate_sample_info

logger = logging.getLogger(__name__)

UPLOAD_TYPES = ["tsv", "txt", "csv"]
LOADERS = {
    "samples": load_rnaseq_samples,
    "counts": load_rnaseq_data,
}


def ns(id: str, name: str) -> str:
    return f"{id}-{name}"


@dataclass
class UploadResult:
    sample_info: Optional[pd.DataFrame] = None
    gene_metadata: Optional[pd.DataFrame] = None
    counts: Optional[pd.DataFrame] = None
    alerts: List[Alert] = field(default_factory=list)
    # both files were available to load
    resolved: bool = False

    @property
    def ready(self) -> bool:
        return self.sample_info is not None and self.counts is not None


# --- Cached loaders ---

@st.cache_data(show_spinner="Reading file...")
def _load_file(kind: str, data: bytes, name: str) -> pd.DataFrame:
    return LOADERS[kind](io.BytesIO(data), sep=separator_for(name))


@st.cache_data(show_spinner="Normalising counts...")
def _normalised_counts(rnaseq_data: pd.DataFrame, sample_info: pd.DataFrame) -> pd.DataFrame:
    return get_normalised_counts(rnaseq_data, sample_info)


# --- Input ---

def _untick_test_data(id: str):
    st.session_state[ns(id, "testdata")] = False


def upload_rnaseq_input(id: str):
    """File pickers for the sample and count files plus a 'Use test data' checkbox.

    Uploading either file unticks the checkbox.
    """
    st.file_uploader(
        "Sample File",
        type=UPLOAD_TYPES,
        key=ns(id, "sampleFile"),
        on_change=_untick_test_data,
        args=(id,),
    )
    st.file_uploader(
        "Count File",
        type=UPLOAD_TYPES,
        key=ns(id, "countFile"),
        on_change=_untick_test_data,
        args=(id,),
    )
    st.checkbox("Use test data", value=False, key=ns(id, "testdata"))


# --- Server ---

def _file_source(id: str, upload_key: str, test_path: Path, label: str, debug: bool) -> Optional[Tuple[bytes, str]]:
    # test data wins over uploads while the box is ticked
    if st.session_state.get(ns(id, "testdata")):
        if debug:
            logger.debug("%s path = %s", label, test_path)
        return test_path.read_bytes(), test_path.name

    uploaded = st.session_state.get(ns(id, upload_key))
    if uploaded is None:
        return None
    if debug:
        logger.debug("%s path = %s", label, uploaded.name)
    return uploaded.getvalue(), uploaded.name


def _load_alert(id: str, anchor: str, what: str, name: str, error: Exception) -> Alert:
    return Alert(
        anchor_id=ns(id, anchor),
        alert_id=f"{what}FileError",
        title=f"Could not read {what} file",
        content=f"`{name}`: {error}",
        style="danger",
    )


def upload_rnaseq_server(id: str, debug: bool = False) -> UploadResult:
    """Load, reconcile and normalise the uploaded (or bundled) files.

    The result is also stored in session state for :func:`upload_rnaseq_output`.
    """
    result = UploadResult()
    st.session_state[ns(id, "result")] = result

    sample_path, count_path = bundled_data_paths()
    sample_src = _file_source(id, "sampleFile", sample_path, "Sample Info", debug)
    count_src = _file_source(id, "countFile", count_path, "Count Data", debug)
    if sample_src is None or count_src is None:
        return result
    result.resolved = True

    sample_info = rnaseq_data = None
    try:
        sample_info = _load_file("samples", *sample_src)
    except ValueError as e:
        logger.warning("Failed to read sample file %s: %s", sample_src[1], e)
        result.alerts.append(_load_alert(id, SAMPLE_ANCHOR, "sample", sample_src[1], e))
    try:
        rnaseq_data = _load_file("counts", *count_src)
    except ValueError as e:
        logger.warning("Failed to read count file %s: %s", count_src[1], e)
        result.alerts.append(_load_alert(id, COUNTS_ANCHOR, "count", count_src[1], e))
    if sample_info is None or rnaseq_data is None:
        return result

    if debug:
        logger.debug("Loaded sample info:\n%s", sample_info.head())
        logger.debug("Loaded count data:\n%s", rnaseq_data.head())

    reconciled = reconcile_samples_and_counts(sample_info, rnaseq_data)
    result.alerts.extend(
        dataclasses.replace(a, anchor_id=ns(id, a.anchor_id)) for a in reconciled.alerts
    )
    if not reconciled.ok:
        return result

    if debug:
        logger.debug("Reconciled samples:\n%s", reconciled.sample_info)

    try:
        counts = _normalised_counts(reconciled.rnaseq_data, reconciled.sample_info)
    except ValueError as e:
        logger.warning("Normalisation failed: %s", e)
        result.alerts.append(Alert(
            anchor_id=ns(id, COUNTS_ANCHOR),
            alert_id="normalisationError",
            title="Could not normalise counts",
            content=str(e),
            style="danger",
        ))
        return result

    problems = validate_sample_info(reconciled.sample_info, counts)
    if problems:
        result.alerts.append(Alert(
            anchor_id=ns(id, COUNTS_ANCHOR),
            alert_id="countDataProblems",
            title="Problems with the uploaded data",
            content=LINE_BREAK.join(problems),
        ))
        return result

    result.sample_info = reconciled.sample_info
    result.gene_metadata = get_gene_metadata(reconciled.rnaseq_data)
    result.counts = counts
    return result


# --- Output ---

def _render_alerts(result: UploadResult, anchor_id: str):
    for alert in result.alerts:
        if alert.anchor_id != anchor_id:
            continue
        show = st.error if alert.style == "danger" else st.warning
        show(f"**{alert.title}**  \n{alert.content}")


def upload_rnaseq_output(id: str, preview_rows: int = 5):
    """Preview tables for the sample, count and gene metadata plus the alert anchors."""
    result: UploadResult = st.session_state.get(ns(id, "result")) or UploadResult()

    st.subheader("Sample Data:")
    _render_alerts(result, ns(id, SAMPLE_ANCHOR))
    if result.sample_info is not None:
        st.dataframe(result.sample_info.iloc[:preview_rows, :5], use_container_width=True, hide_index=True)

    st.subheader("Count Data:")
    _render_alerts(result, ns(id, COUNTS_ANCHOR))
    if result.counts is not None:
        st.dataframe(result.counts.iloc[:preview_rows, :10], use_container_width=True)

    st.subheader("Gene Metadata:")
    if result.gene_metadata is not None:
        st.dataframe(result.gene_metadata.head(preview_rows), use_container_width=True, hide_index=True)
