import numpy as np
import pandas as pd
import pytest

from rnaseq_pipeline.transforms import TRANSFORMS, apply_transform


@pytest.fixture
def counts():
    return pd.DataFrame(
        {"A": [9.0, 0.0, 2.0], "B": [99.0, 0.0, 4.0], "C": [999.0, 0.0, 6.0]},
        index=["g1", "g2", "g3"],
    )


def test_raw_returns_copy(counts):
    out = apply_transform(counts, "Raw")
    pd.testing.assert_frame_equal(out, counts)
    assert out is not counts


def test_log10(counts):
    out = apply_transform(counts, "Log10")
    assert out.loc["g1"].tolist() == pytest.approx([1.0, 2.0, 3.0])


def test_max_scaled(counts):
    out = apply_transform(counts, "Max Scaled")
    assert out.loc["g3"].tolist() == pytest.approx([1 / 3, 2 / 3, 1.0])
    assert out.loc["g2"].isna().all()


def test_mean_centred_and_scaled(counts):
    out = apply_transform(counts, "Mean Centred and Scaled")
    assert out.loc["g3"].tolist() == pytest.approx([-1.0, 0.0, 1.0])
    assert out.loc["g2"].isna().all()
    assert np.nanmean(out.loc["g1"]) == pytest.approx(0.0)


def test_unknown_transform(counts):
    with pytest.raises(ValueError, match="Unknown transform"):
        apply_transform(counts, "Square")
    assert list(TRANSFORMS) == ["Raw", "Log10", "Max Scaled", "Mean Centred and Scaled"]
