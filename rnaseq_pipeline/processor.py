import logging

import numpy as np
import pandas as pd

from rnaseq_pipeline.loaders import GENE_ID, NORM_SUFFIX, SAMPLE_COL, get_counts

logger = logging.getLogger(__name__)


def geo_mean(series):
    series = pd.to_numeric(series, errors="coerce")
    series = series[series > 0]  # filter out non-positive values
    return np.exp(np.mean(np.log(series))) if not series.empty else np.nan


def size_factors(counts: pd.DataFrame) -> pd.Series:
    """Median-of-ratios size factors, one per sample (column)."""
    counts = counts.apply(pd.to_numeric, errors="coerce").fillna(0)

    # Step 1: reference sample = per-gene geometric mean, genes with any zero excluded
    expressed = counts[(counts > 0).all(axis=1)]
    if expressed.empty:
        raise ValueError("Cannot estimate size factors: every gene has a zero count in at least one sample.")
    reference = expressed.apply(geo_mean, axis=1)

    # Step 2: median ratio of each sample to the reference
    ratios = expressed.div(reference, axis=0)
    return ratios.median(axis=0).rename("size_factor")


def normalise_counts(rnaseq_data: pd.DataFrame, sample_info: pd.DataFrame) -> pd.DataFrame:
    """Add ``<sample> normalised count`` columns for the samples in ``sample_info``."""
    raw = get_counts(rnaseq_data)
    if raw is None:
        raise ValueError("Count data has no raw count columns to normalise.")

    samples = [s for s in sample_info[SAMPLE_COL] if s in raw.columns]
    raw = raw[samples]
    factors = size_factors(raw)
    logger.debug("Size factors: %s", factors.round(3).to_dict())

    normalised = raw.div(factors, axis=1)
    normalised.columns = [f"{s}{NORM_SUFFIX}" for s in normalised.columns]

    existing = [c for c in normalised.columns if c in rnaseq_data.columns]
    out = rnaseq_data.drop(columns=existing)
    return out.join(normalised, on=GENE_ID)


def get_normalised_counts(rnaseq_data: pd.DataFrame, sample_info: pd.DataFrame) -> pd.DataFrame:
    norm_counts = get_counts(rnaseq_data, normalised=True)
    # if file does not have normalised counts, get raw counts and normalise
    if norm_counts is None:
        norm_data = normalise_counts(rnaseq_data, sample_info)
        norm_counts = get_counts(norm_data, normalised=True)
    return norm_counts


def remove_zero_variance(counts: pd.DataFrame) -> pd.DataFrame:
    """Drop genes (rows) whose variance across samples is zero or undefined."""
    variance = counts.var(axis=1)
    keep = variance.notna() & (variance > 0)
    n_removed = int((~keep).sum())
    if n_removed:
        logger.debug("Removed %d zero-variance genes", n_removed)
    return counts[keep]


def top_variable_genes(counts: pd.DataFrame, n: int) -> list:
    variance = counts.var(axis=1).dropna()
    return variance.sort_values(ascending=False, kind="mergesort").head(n).index.tolist()
