# rnaseq_pipeline/loaders.py

import logging
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

EXTDATA_DIR = Path(__file__).parent / "extdata"
TEST_SAMPLE_FILE = "zfs-rnaseq-sampleInfo.tsv"
TEST_COUNT_FILE = "counts.shield-subset.tsv"

SAMPLE_COL = "sample"
GENE_ID = "GeneID"
COUNT_SUFFIX = " count"
NORM_SUFFIX = " normalised count"

GENE_ID_ALIASES = ["GeneID", "Gene ID", "gene_id", "Gene", "gene"]
KNOWN_METADATA = {"chr", "start", "end", "strand", "length", "biotype", "name", "description"}


def bundled_data_paths() -> Tuple[Path, Path]:
    """Paths of the bundled example sample and count files."""
    return EXTDATA_DIR / TEST_SAMPLE_FILE, EXTDATA_DIR / TEST_COUNT_FILE


def separator_for(name) -> str:
    return "," if str(name).lower().endswith(".csv") else "\t"


def _read_table(src, sep: Optional[str] = None, dtype=None) -> pd.DataFrame:
    if sep is None:
        sep = separator_for(getattr(src, "name", src))
    df = pd.read_csv(src, sep=sep, dtype=dtype)
    df.columns = df.columns.astype(str).str.strip()
    return df


# --- Column helpers ---

def column_kind(col: str) -> Optional[str]:
    if col.endswith(NORM_SUFFIX):
        return "normalised"
    if col.endswith(COUNT_SUFFIX):
        return "raw"
    return None


def sample_from_column(col: str) -> str:
    if col.endswith(NORM_SUFFIX):
        return col[: -len(NORM_SUFFIX)]
    if col.endswith(COUNT_SUFFIX):
        return col[: -len(COUNT_SUFFIX)]
    return col


def count_column_samples(rnaseq_data: pd.DataFrame) -> list[str]:
    names = [sample_from_column(c) for c in rnaseq_data.columns if column_kind(c)]
    return list(dict.fromkeys(names))


# --- Loading ---

def load_rnaseq_samples(src, sep: Optional[str] = None) -> pd.DataFrame:
    """Load a sample information file. Requires a ``sample`` column of unique IDs."""
    # IDs stay text so "01" still matches an "01 count" column
    df = _read_table(src, sep, dtype={SAMPLE_COL: str})

    if SAMPLE_COL not in df.columns:
        raise ValueError(f"Sample file must contain a '{SAMPLE_COL}' column. Found: {list(df.columns)}")

    df = df.dropna(subset=[SAMPLE_COL])
    df[SAMPLE_COL] = df[SAMPLE_COL].astype(str).str.strip()
    df = df[df[SAMPLE_COL] != ""]

    dups = sorted(df.loc[df[SAMPLE_COL].duplicated(), SAMPLE_COL].unique())
    if dups:
        raise ValueError(f"Duplicated sample IDs in sample file: {', '.join(dups)}")

    return df.reset_index(drop=True)


def _gene_id_column(df: pd.DataFrame) -> str:
    return next((c for c in GENE_ID_ALIASES if c in df.columns), df.columns[0])


def _is_numeric_text(values: pd.Series) -> bool:
    present = values.dropna()
    return not present.empty and pd.to_numeric(present, errors="coerce").notna().all()


def load_rnaseq_data(src, sep: Optional[str] = None) -> pd.DataFrame:
    """Load a count file.

    Columns named ``<sample> count`` hold raw counts and ``<sample> normalised count``
    hold normalised counts. A plain matrix (gene ID column followed by one numeric column
    per sample) is converted to that form.
    """
    # everything is read as text, count columns are converted below
    df = _read_table(src, sep, dtype=str)
    if df.empty or len(df.columns) < 2:
        raise ValueError("Count file has no data columns.")

    id_col = _gene_id_column(df)
    df = df.rename(columns={id_col: GENE_ID})
    df[GENE_ID] = df[GENE_ID].astype(str)

    count_cols = [c for c in df.columns if column_kind(c)]
    if not count_cols:
        plain = [
            c for c in df.columns
            if c != GENE_ID
            and c.lower() not in KNOWN_METADATA
            and _is_numeric_text(df[c])
        ]
        if not plain:
            raise ValueError("No count columns found in count file.")
        df = df.rename(columns={c: f"{c}{COUNT_SUFFIX}" for c in plain})
        count_cols = [f"{c}{COUNT_SUFFIX}" for c in plain]

    for col in count_cols:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    if df[GENE_ID].duplicated().any():
        n_dup = int(df[GENE_ID].duplicated().sum())
        logger.warning("Dropping %d rows with duplicated gene IDs", n_dup)
        df = df[~df[GENE_ID].duplicated(keep="first")]

    return df.reset_index(drop=True)


# --- Accessors ---

def get_counts(rnaseq_data: pd.DataFrame, normalised: bool = False) -> Optional[pd.DataFrame]:
    """Genes x samples matrix of raw (or normalised) counts, or None if the file has none."""
    wanted = "normalised" if normalised else "raw"
    cols = [c for c in rnaseq_data.columns if column_kind(c) == wanted]
    if not cols:
        return None

    counts = rnaseq_data.set_index(GENE_ID)[cols]
    counts.columns = [sample_from_column(c) for c in cols]
    return counts


def get_gene_metadata(rnaseq_data: pd.DataFrame) -> pd.DataFrame:
    cols = [c for c in rnaseq_data.columns if column_kind(c) is None]
    return rnaseq_data[cols].copy()


def subset_to_samples(rnaseq_data: pd.DataFrame, sample_info: pd.DataFrame) -> pd.DataFrame:
    """Keep gene metadata plus count columns of samples in ``sample_info``, in its order."""
    order = {s: i for i, s in enumerate(sample_info[SAMPLE_COL])}
    meta_cols = [c for c in rnaseq_data.columns if column_kind(c) is None]
    count_cols = [
        c for c in rnaseq_data.columns
        if column_kind(c) and sample_from_column(c) in order
    ]
    count_cols.sort(key=lambda c: (column_kind(c) == "normalised", order[sample_from_column(c)]))
    return rnaseq_data[meta_cols + count_cols].copy()
