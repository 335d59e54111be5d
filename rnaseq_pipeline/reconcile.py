# rnaseq_pipeline/reconcile.py
"""Match the samples of an uploaded sample file with those of a count file.

Samples present in only one of the two tables are dropped from the other and
reported as alerts, so the returned tables always describe the same samples.
"""

import logging

import pandas as pd

from rnaseq_pipeline.loaders import SAMPLE_COL, count_column_samples, get_counts, subset_to_samples
from rnaseq_pipeline.types import Alert, ReconciledData
from rnaseq_pipeline.validators import check_samples_match_counts

logger = logging.getLogger(__name__)

LINE_BREAK = "  \n"

SAMPLE_ANCHOR = "sampleInputAlert"
SAMPLE_ALERT_ID = "sampleIdsAlert"
SAMPLE_ALERT_TITLE = "Sample IDs missing from counts"

COUNTS_ANCHOR = "countsInputAlert"
COUNTS_ALERT_ID = "countSampleIdsAlert"
COUNTS_ALERT_TITLE = "Sample IDs missing from samples file"


def checked_counts(rnaseq_data: pd.DataFrame) -> pd.DataFrame:
    """Counts used to compare samples: normalised if the file has them, raw otherwise."""
    counts = get_counts(rnaseq_data, normalised=True)
    if counts is None:
        counts = get_counts(rnaseq_data)
    return counts


def reconcile_samples_and_counts(sample_info: pd.DataFrame, rnaseq_data: pd.DataFrame) -> ReconciledData:
    counts = checked_counts(rnaseq_data)
    mismatch = check_samples_match_counts(counts, sample_info)
    if mismatch is None:
        return ReconciledData(sample_info=sample_info, rnaseq_data=rnaseq_data)

    logger.debug("Sample mismatch (%s): %s", mismatch.kind, mismatch.message)
    alerts = []
    sample_subset = sample_info
    rnaseq_subset = rnaseq_data

    # samples file entries with no count column
    if mismatch.missing_from_counts:
        available = set(sample_info[SAMPLE_COL]) & set(counts.columns)
        if not available:
            alerts.append(Alert(
                anchor_id=SAMPLE_ANCHOR,
                alert_id=SAMPLE_ALERT_ID,
                title=SAMPLE_ALERT_TITLE,
                content="**None** of the samples in the samples file match any of those in the counts file.",
                style="danger",
            ))
            sample_subset = None
        else:
            sample_subset = sample_info[sample_info[SAMPLE_COL].isin(available)].reset_index(drop=True)
            alerts.append(Alert(
                anchor_id=SAMPLE_ANCHOR,
                alert_id=SAMPLE_ALERT_ID,
                title=SAMPLE_ALERT_TITLE,
                content=LINE_BREAK.join([
                    mismatch.samples_message,
                    "These samples have been removed from the sample information",
                    "If you want these samples included, they must also be present in the counts file",
                ]),
            ))

    # count columns with no entry in the samples file
    if mismatch.missing_from_samples:
        matching = set(sample_info[SAMPLE_COL]) & set(count_column_samples(rnaseq_data))
        if not matching:
            alerts.append(Alert(
                anchor_id=COUNTS_ANCHOR,
                alert_id=COUNTS_ALERT_ID,
                title=COUNTS_ALERT_TITLE,
                content="**None** of the samples in the counts file match any of those in the samples file.",
                style="danger",
            ))
            rnaseq_subset = None
        else:
            rnaseq_subset = subset_to_samples(rnaseq_data, sample_info)
            alerts.append(Alert(
                anchor_id=COUNTS_ANCHOR,
                alert_id=COUNTS_ALERT_ID,
                title=COUNTS_ALERT_TITLE,
                content=LINE_BREAK.join([
                    mismatch.counts_message,
                    "These samples have been removed from the count data",
                    "If you want these samples included, they must be present in the samples file",
                ]),
            ))

    if sample_subset is not None and rnaseq_subset is not None:
        # keep count columns in the same order as the (possibly reduced) sample table
        rnaseq_subset = subset_to_samples(rnaseq_subset, sample_subset)

    return ReconciledData(sample_info=sample_subset, rnaseq_data=rnaseq_subset, alerts=alerts)
