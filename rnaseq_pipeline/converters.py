# rnaseq_pipeline/converters.py

from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from rnaseq_pipeline.loaders import SAMPLE_COL


def frame_to_records(df: Optional[pd.DataFrame]) -> Optional[Dict[str, Any]]:
    """JSON-safe representation of a DataFrame (index kept)."""
    if df is None:
        return None
    clean = df.astype(object).where(df.notna(), None)
    return {
        "index_name": df.index.name,
        "columns": [str(c) for c in df.columns],
        "index": [str(i) if not isinstance(i, (int, np.integer)) else int(i) for i in df.index],
        "data": clean.values.tolist(),
    }


def records_to_frame(payload: Optional[Dict[str, Any]]) -> Optional[pd.DataFrame]:
    if not payload:
        return None
    df = pd.DataFrame(payload["data"], columns=payload["columns"], index=payload["index"])
    df.index.name = payload.get("index_name")
    return df.infer_objects()


def counts_to_long(counts: pd.DataFrame, sample_info: Optional[pd.DataFrame] = None) -> pd.DataFrame:
    """Melt a genes x samples matrix into long form, joining sample metadata when given."""
    long_df = (
        counts.rename_axis("gene")
        .reset_index()
        .melt(id_vars="gene", var_name=SAMPLE_COL, value_name="value")
    )
    if sample_info is not None:
        long_df = long_df.merge(sample_info, on=SAMPLE_COL, how="left")
    return long_df


def sample_columns(sample_info: pd.DataFrame) -> List[str]:
    return [c for c in sample_info.columns if c != SAMPLE_COL]
