# interface/plotting/plot_heatmap.py

import pandas as pd
import plotly.graph_objects as go
from plotly.graph_objects import Figure
from typing import Optional, Tuple

from rnaseq_pipeline.loaders import GENE_ID, SAMPLE_COL
from rnaseq_pipeline.processor import remove_zero_variance, top_variable_genes
from rnaseq_pipeline.transforms import TRANSFORM_LABELS, apply_transform

DIVERGING_TRANSFORMS = {"Mean Centred and Scaled"}


def build_heatmap(
    counts: pd.DataFrame,
    sample_info: Optional[pd.DataFrame] = None,
    gene_metadata: Optional[pd.DataFrame] = None,
    transform: str = "Raw",
    genes: Optional[list[str]] = None,
    gene_count: int = 50,
    sort_by: Optional[str] = None,
    colour_scale: str = "Viridis",
    show_gene_labels: bool = True,
    show_sample_labels: bool = True
) -> Tuple[Figure, pd.DataFrame]:
    """Heatmap of transformed counts. Returns the figure and the plotted values."""

    counts = remove_zero_variance(counts)
    if counts.empty:
        raise ValueError("No genes with non-zero variance left to plot.")

    counts = _select_genes(counts, genes, gene_count)
    if counts.empty:
        raise ValueError("None of the selected genes have non-zero variance.")

    counts = _order_samples(counts, sample_info, sort_by)
    values = apply_transform(counts, transform)
    values.index = _gene_labels(values.index, gene_metadata)

    heatmap = go.Heatmap(
        z=values.values,
        x=[str(c) for c in values.columns],
        y=list(values.index),
        colorscale=colour_scale,
        zmid=0 if transform in DIVERGING_TRANSFORMS else None,
        colorbar=dict(title=TRANSFORM_LABELS.get(transform, transform)),
        hoverongaps=False,
        hovertemplate="Sample: %{x}<br>Gene: %{y}<br>Value: %{z:.3g}<extra></extra>",
    )
    fig = go.Figure(data=heatmap)
    fig.update_layout(
        height=max(400, 16 * len(values) + 150),
        margin=dict(t=40, b=40),
        template="plotly_white",
    )
    fig.update_xaxes(showticklabels=show_sample_labels, tickangle=-45, type="category")
    fig.update_yaxes(showticklabels=show_gene_labels, autorange="reversed", type="category")
    return fig, values


# --- Helpers ---

def _select_genes(counts: pd.DataFrame, genes: Optional[list[str]], gene_count: int) -> pd.DataFrame:
    if genes:
        return counts.loc[[g for g in genes if g in counts.index]]
    return counts.loc[top_variable_genes(counts, gene_count)]


def _order_samples(counts: pd.DataFrame, sample_info: Optional[pd.DataFrame], sort_by: Optional[str]) -> pd.DataFrame:
    if sample_info is None or SAMPLE_COL not in sample_info.columns:
        return counts

    ordered = sample_info
    if sort_by and sort_by in sample_info.columns:
        ordered = sample_info.sort_values(sort_by, kind="mergesort")
    columns = [s for s in ordered[SAMPLE_COL] if s in counts.columns]
    return counts[columns]


def gene_name_map(gene_metadata: Optional[pd.DataFrame]) -> dict:
    if gene_metadata is None or "Name" not in gene_metadata.columns:
        return {}
    named = gene_metadata.dropna(subset=["Name"])
    return dict(zip(named[GENE_ID].astype(str), named["Name"].astype(str)))


def _gene_labels(gene_ids: pd.Index, gene_metadata: Optional[pd.DataFrame]) -> list[str]:
    names = gene_name_map(gene_metadata)
    labels = [names.get(str(g), str(g)) for g in gene_ids]

    # plotly merges repeated category labels, so disambiguate with the ID
    seen = pd.Series(labels).duplicated(keep=False).tolist()
    return [f"{label} ({g})" if dup else label for label, g, dup in zip(labels, gene_ids, seen)]
