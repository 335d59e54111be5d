# interface/backend/session.py

import streamlit as st

from interface.backend.settings import configure_logging, load_settings

# Keys holding the uploaded data, shared between pages
DATA_KEYS = ("sample_info_df", "counts_df", "gene_metadata_df")
# namespace of the upload page widgets
UPLOAD_ID = "rnaseqData"


def initialize_session_state():
    defaults = {
        "settings": load_settings(),
        "heatmap_config": {
            "transform": "Mean Centred and Scaled",
            "gene_count": 50,
            "genes": [],
            "sort_by": None,
            "colour_scale": "RdBu_r",
            "show_gene_labels": True,
            "show_sample_labels": True,
        },
        "sample_info_df": None,
        "counts_df": None,
        "gene_metadata_df": None,
    }

    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value

    configure_logging(st.session_state["settings"])


def has_data() -> bool:
    return all(st.session_state.get(k) is not None for k in DATA_KEYS)


def clear_data(state):
    """Drop the shared data so pages fall back to their empty views."""
    for key in DATA_KEYS:
        state[key] = None
