import logging

import streamlit as st
import pandas as pd

from interface.backend.session import has_data, initialize_session_state
from interface.backend.session_schema import HeatmapConfig
from interface.plotting.plot_heatmap import build_heatmap, gene_name_map
from interface.plotting.utils import render_heatmap_data_tables
from rnaseq_pipeline.converters import sample_columns
from rnaseq_pipeline.processor import remove_zero_variance
from rnaseq_pipeline.transforms import TRANSFORMS

logger = logging.getLogger(__name__)

COLOUR_SCALES = ["Viridis", "RdBu_r", "Magma", "Plasma", "Cividis", "Blues"]


def _index_of(options: list, value, default: int = 0) -> int:
    return options.index(value) if value in options else default


def _heatmap_controls(counts: pd.DataFrame, sample_info: pd.DataFrame, gene_metadata: pd.DataFrame) -> HeatmapConfig:
    config: HeatmapConfig = st.session_state["heatmap_config"]
    max_genes = st.session_state["settings"].max_heatmap_genes

    st.markdown("### Heatmap Configuration")

    transforms = list(TRANSFORMS)
    transform = st.radio(
        "Transformation",
        transforms,
        index=_index_of(transforms, config.get("transform")),
        horizontal=True
    )

    col1, col2, col3 = st.columns(3)

    with col1:
        n_genes = len(counts)
        upper = max(1, min(max_genes, n_genes))
        if upper > 1:
            gene_count = st.slider(
                "Number of most variable genes",
                min_value=1,
                max_value=upper,
                value=min(config.get("gene_count", 50), upper)
            )
        else:
            # slider needs min < max
            gene_count = 1
            st.caption("Only one gene can be shown.")
        names = gene_name_map(gene_metadata)
        genes = st.multiselect(
            "Or choose genes",
            options=list(counts.index),
            default=[g for g in config.get("genes", []) if g in counts.index],
            format_func=lambda g: names.get(str(g), str(g))
        )

    with col2:
        sort_options = ["None"] + sample_columns(sample_info)
        sort_by = st.selectbox(
            "Order samples by",
            sort_options,
            index=_index_of(sort_options, config.get("sort_by"))
        )
        colour_scale = st.selectbox(
            "Colour scale",
            COLOUR_SCALES,
            index=_index_of(COLOUR_SCALES, config.get("colour_scale"))
        )

    with col3:
        show_gene_labels = st.checkbox("Show gene labels", value=config.get("show_gene_labels", True))
        show_sample_labels = st.checkbox("Show sample labels", value=config.get("show_sample_labels", True))

    config = {
        "transform": transform,
        "gene_count": gene_count,
        "genes": genes,
        "sort_by": None if sort_by == "None" else sort_by,
        "colour_scale": colour_scale,
        "show_gene_labels": show_gene_labels,
        "show_sample_labels": show_sample_labels,
    }
    st.session_state["heatmap_config"] = config
    return config


def run():
    initialize_session_state()
    st.title("Expression Heatmap")

    if not has_data():
        st.info("Please upload sample and count data first.")
        return

    counts: pd.DataFrame = st.session_state["counts_df"]
    sample_info: pd.DataFrame = st.session_state["sample_info_df"]
    gene_metadata: pd.DataFrame = st.session_state["gene_metadata_df"]

    variable = remove_zero_variance(counts)
    n_removed = len(counts) - len(variable)
    if n_removed:
        st.caption(f"{n_removed} gene(s) with zero variance across samples are not shown.")
    if variable.empty:
        st.warning("All genes have zero variance across samples. Nothing to plot.")
        return

    opts = _heatmap_controls(variable, sample_info, gene_metadata)

    try:
        fig, values = build_heatmap(
            counts=variable,
            sample_info=sample_info,
            gene_metadata=gene_metadata,
            transform=opts["transform"],
            genes=opts["genes"],
            gene_count=opts["gene_count"],
            sort_by=opts["sort_by"],
            colour_scale=opts["colour_scale"],
            show_gene_labels=opts["show_gene_labels"],
            show_sample_labels=opts["show_sample_labels"]
        )
    except ValueError as e:
        logger.warning("Heatmap not drawn: %s", e)
        st.warning(str(e))
        return

    st.plotly_chart(fig, use_container_width=True)
    render_heatmap_data_tables(values, sample_info, opts["transform"])


run()
