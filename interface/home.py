# interface/home.py

import streamlit as st

def run():
    st.header("RNA-seq Visualisation")

    st.markdown(
        """
        This app helps you explore **RNA-seq count data** from an experiment.

        **Key Features:**
        - Upload a sample information file and a count file (tab-separated), or use the bundled test data
        - Samples present in only one of the two files are removed, with a warning listing them
        - Counts are normalised (median-of-ratios) when the count file has no normalised counts
        - Genes with zero variance across samples are removed before plotting
        - Plot a heatmap of the most variable (or chosen) genes with a selectable transformation
        - Export results or session state for reuse

        **File formats:**
        - *Sample file*: a `sample` column of sample IDs plus any metadata columns (e.g. `condition`)
        - *Count file*: a gene ID column, optional gene metadata (e.g. `Name`), then
          `<sample> count` and/or `<sample> normalised count` columns. A plain matrix with one
          column per sample also works.

        **Next step:** Go to the **Upload Data** page to begin.
        """
    )

run()
