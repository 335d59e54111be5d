import io

import pandas as pd
import pytest

from rnaseq_pipeline.loaders import load_rnaseq_data, load_rnaseq_samples

COUNTS_TSV = (
    "GeneID\tName\tA count\tB count\tC count\tD count\n"
    "g1\tsox32\t10\t20\t30\t40\n"
    "g2\tgsc\t5\t5\t5\t5\n"
    "g3\tmych\t0\t0\t0\t0\n"
    "g4\ttbxta\t100\t200\t50\t25\n"
)


def samples_tsv(*ids: str) -> str:
    rows = [f"{sid}\t{'ctrl' if i % 2 == 0 else 'mut'}" for i, sid in enumerate(ids)]
    return "sample\tcondition\n" + "\n".join(rows) + "\n"


@pytest.fixture
def make_samples():
    def _make(*ids):
        return load_rnaseq_samples(io.StringIO(samples_tsv(*ids)))
    return _make


@pytest.fixture
def rnaseq_data() -> pd.DataFrame:
    return load_rnaseq_data(io.StringIO(COUNTS_TSV))


@pytest.fixture
def sample_info(make_samples) -> pd.DataFrame:
    return make_samples("A", "B", "C", "D")
