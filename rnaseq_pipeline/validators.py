# rnaseq_pipeline/validators.py
from typing import Optional

import pandas as pd

from rnaseq_pipeline.loaders import SAMPLE_COL
from rnaseq_pipeline.types import SampleMismatch


def check_samples_match_counts(counts: pd.DataFrame, sample_info: pd.DataFrame) -> Optional[SampleMismatch]:
    """Compare sample IDs with the sample columns of a counts matrix.

    Returns None when both name the same set of samples.
    """
    sample_ids = [str(s) for s in sample_info[SAMPLE_COL]]
    count_samples = [str(c) for c in counts.columns]

    in_counts = set(count_samples)
    in_samples = set(sample_ids)
    mismatch = SampleMismatch(
        missing_from_counts=[s for s in sample_ids if s not in in_counts],
        missing_from_samples=[c for c in count_samples if c not in in_samples],
    )
    return mismatch if mismatch.kind else None


def validate_sample_info(sample_info, counts) -> list[str]:
    errors = []

    if sample_info is None or SAMPLE_COL not in sample_info.columns:
        errors.append(f"Sample information is missing the '{SAMPLE_COL}' column")
    else:
        dups = sample_info[SAMPLE_COL][sample_info[SAMPLE_COL].duplicated()].unique()
        for sid in dups:
            errors.append(f"Duplicated sample ID: '{sid}'")
        if sample_info.empty:
            errors.append("Sample information contains no samples")

    if counts is None:
        errors.append("No count data available")
    elif counts.shape[1] == 0:
        errors.append("Count data contains no sample columns")
    elif counts.shape[0] == 0:
        errors.append("Count data contains no genes")

    return errors
