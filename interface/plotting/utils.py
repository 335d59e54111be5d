# interface/plotting/utils.py

import streamlit as st
import pandas as pd
from typing import Optional

from rnaseq_pipeline.converters import counts_to_long


def render_heatmap_data_tables(
    values: Optional[pd.DataFrame],
    sample_info: Optional[pd.DataFrame],
    transform: str
):
    with st.expander("Show Raw Plot Values"):
        if values is None or values.empty:
            st.warning("Could not display raw data: no values were plotted.")
            return

        st.markdown(f"**Transform: `{transform}`**")
        st.dataframe(values, use_container_width=True)

        long_df = counts_to_long(values, sample_info)
        st.download_button(
            label="Download values (TSV)",
            data=long_df.to_csv(sep="\t", index=False),
            file_name=f"heatmap_{transform.lower().replace(' ', '_')}.tsv",
            mime="text/tab-separated-values",
            use_container_width=True
        )
