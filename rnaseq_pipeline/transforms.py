# rnaseq_pipeline/transforms.py

from typing import Callable, Dict

import numpy as np
import pandas as pd


def raw(counts: pd.DataFrame) -> pd.DataFrame:
    return counts.copy()


def log10(counts: pd.DataFrame) -> pd.DataFrame:
    return np.log10(counts + 1)


def max_scaled(counts: pd.DataFrame) -> pd.DataFrame:
    row_max = counts.max(axis=1).replace(0, np.nan)
    return counts.div(row_max, axis=0)


def mean_centred_and_scaled(counts: pd.DataFrame) -> pd.DataFrame:
    """Z-score each gene across samples. Genes with zero SD become NaN."""
    mean = counts.mean(axis=1)
    sd = counts.std(axis=1).replace(0, np.nan)
    return counts.sub(mean, axis=0).div(sd, axis=0)


TRANSFORMS: Dict[str, Callable[[pd.DataFrame], pd.DataFrame]] = {
    "Raw": raw,
    "Log10": log10,
    "Max Scaled": max_scaled,
    "Mean Centred and Scaled": mean_centred_and_scaled,
}

# colour bar titles
TRANSFORM_LABELS = {
    "Raw": "Normalised count",
    "Log10": "log10(count + 1)",
    "Max Scaled": "Fraction of max",
    "Mean Centred and Scaled": "Z-score",
}


def apply_transform(counts: pd.DataFrame, name: str) -> pd.DataFrame:
    if name not in TRANSFORMS:
        raise ValueError(f"Unknown transform '{name}'. Choose one of: {', '.join(TRANSFORMS)}")
    return TRANSFORMS[name](counts)
