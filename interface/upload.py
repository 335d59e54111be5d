# interface/upload.py

import streamlit as st

from interface.backend.session import UPLOAD_ID, clear_data, initialize_session_state
from interface.components.upload_rnaseq import (
    upload_rnaseq_input,
    upload_rnaseq_output,
    upload_rnaseq_server,
)


def run():
    initialize_session_state()
    settings = st.session_state["settings"]

    st.title("Upload RNA-seq Data")

    with st.sidebar:
        st.caption("Data Files")
        upload_rnaseq_input(UPLOAD_ID)

    result = upload_rnaseq_server(UPLOAD_ID, debug=settings.debug)

    if result.ready:
        st.session_state["sample_info_df"] = result.sample_info
        st.session_state["counts_df"] = result.counts
        st.session_state["gene_metadata_df"] = result.gene_metadata
        st.success(
            f"Loaded {result.counts.shape[0]} genes and {result.counts.shape[1]} samples. "
            "Open the **Heatmap** page to plot them."
        )
    elif result.resolved:
        # rejected files must not leave an earlier dataset behind
        clear_data(st.session_state)
    else:
        st.info("Upload a sample file and a count file, or tick **Use test data**.")

    upload_rnaseq_output(UPLOAD_ID, preview_rows=settings.preview_rows)


run()
