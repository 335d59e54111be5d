# rnaseq_pipeline/types.py

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

ONLY_BOTH_SUFFIX = " Only samples in both were returned"


@dataclass
class SampleMismatch:
    missing_from_counts: List[str] = field(default_factory=list)
    missing_from_samples: List[str] = field(default_factory=list)

    @property
    def kind(self) -> Optional[str]:
        if self.missing_from_counts and self.missing_from_samples:
            return "missing_from_both_samples_and_counts"
        if self.missing_from_counts:
            return "missing_from_counts"
        if self.missing_from_samples:
            return "missing_from_samples"
        return None

    @property
    def samples_message(self) -> str:
        if not self.missing_from_counts:
            return ""
        return (
            "The following samples are in the samples file but not in the counts file: "
            + ", ".join(self.missing_from_counts)
        )

    @property
    def counts_message(self) -> str:
        if not self.missing_from_samples:
            return ""
        return (
            "The following samples are in the counts file but not in the samples file: "
            + ", ".join(self.missing_from_samples)
        )

    @property
    def message(self) -> str:
        if self.kind == "missing_from_both_samples_and_counts":
            return f"{self.samples_message}\n{self.counts_message}{ONLY_BOTH_SUFFIX}"
        return self.samples_message or self.counts_message


@dataclass
class Alert:
    anchor_id: str
    alert_id: str
    title: str
    content: str
    style: str = "warning"  # "warning" | "danger"


@dataclass
class ReconciledData:
    sample_info: Optional[pd.DataFrame]
    rnaseq_data: Optional[pd.DataFrame]
    alerts: List[Alert] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.sample_info is not None and self.rnaseq_data is not None
