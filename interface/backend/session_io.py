# interface/backend/session_io.py

import json
import logging
from typing import Any, Dict, Mapping, MutableMapping

import streamlit as st

from rnaseq_pipeline.converters import frame_to_records, records_to_frame
from interface.backend.session import UPLOAD_ID, clear_data, has_data
from interface.backend.session_schema import HeatmapConfig

logger = logging.getLogger(__name__)

SESSION_VERSION = 1

# --- Core Session State Keys ---
FRAME_KEYS = {
    "sample_info_df": "sample_info",
    "counts_df": "counts",
    "gene_metadata_df": "gene_metadata",
}


def session_to_dict(state: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert session state to a JSON-safe dict."""
    session = {
        "version": SESSION_VERSION,
        "heatmap_config": dict(state.get("heatmap_config", {})),
    }
    for state_key, name in FRAME_KEYS.items():
        session[name] = frame_to_records(state.get(state_key))
    return session


def session_from_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Session state entries restored from an exported session dict."""
    if data.get("version", SESSION_VERSION) != SESSION_VERSION:
        raise ValueError(f"Unsupported session version: {data.get('version')}")

    config: HeatmapConfig = data.get("heatmap_config", {})
    restored = {"heatmap_config": config} if config else {}
    for state_key, name in FRAME_KEYS.items():
        restored[state_key] = records_to_frame(data.get(name))

    counts = restored.get("counts_df")
    if counts is not None:
        counts.index = counts.index.astype(str)
    return restored


def deserialize_session(data: Dict[str, Any]):
    """Restore session state from a previously exported session dict."""
    for key, value in session_from_dict(data).items():
        st.session_state[key] = value
    logger.info("Session imported")
    st.toast("Session imported.", icon="📥")
    st.rerun()


def session_json(state: Mapping[str, Any]) -> str:
    return json.dumps(session_to_dict(state), indent=2)


def reset_session(state: MutableMapping[str, Any]):
    """Forget the loaded data and heatmap choices; settings stay."""
    clear_data(state)
    state.pop("heatmap_config", None)
    for key in [k for k in state if str(k).startswith(f"{UPLOAD_ID}-")]:
        del state[key]


def session_export_button():
    st.download_button(
        label="Export",
        data=session_json(st.session_state),
        file_name="rnaseq_vis_session.json",
        mime="application/json",
        disabled=not has_data(),
        use_container_width=True
    )


@st.dialog("Import Session")
def session_import_dialog():
    uploaded = st.file_uploader("Session file (JSON)", type="json")
    if uploaded is None:
        return
    try:
        deserialize_session(json.load(uploaded))
    except (json.JSONDecodeError, KeyError, ValueError) as e:
        logger.warning("Session import failed: %s", e)
        st.error(f"Could not import session: {e}")


def session_import_button():
    if st.button("Import", use_container_width=True):
        session_import_dialog()


@st.dialog("Clear Data")
def session_restart_dialog():
    st.warning("The uploaded files, loaded tables and heatmap settings will be cleared.")
    if st.button("Clear", type="primary"):
        reset_session(st.session_state)
        logger.info("Session data cleared")
        st.rerun()


def session_restart_button():
    if st.button("", type="primary", icon=":material/restart_alt:", help="Clear loaded data", use_container_width=True):
        session_restart_dialog()
