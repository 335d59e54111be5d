import pandas as pd

from rnaseq_pipeline.validators import check_samples_match_counts, validate_sample_info


def test_same_samples_in_any_order_match(sample_info):
    counts = pd.DataFrame({"D": [1], "C": [1], "B": [1], "A": [1]})
    assert check_samples_match_counts(counts, sample_info) is None


def test_mismatch_kinds(sample_info):
    only_counts = pd.DataFrame({s: [1] for s in "ABCDE"})
    only_samples = pd.DataFrame({s: [1] for s in "AB"})

    assert check_samples_match_counts(only_counts, sample_info).kind == "missing_from_samples"
    assert check_samples_match_counts(only_samples, sample_info).kind == "missing_from_counts"


def test_validate_sample_info(sample_info):
    counts = pd.DataFrame({"A": [1.0]}, index=["g1"])
    assert validate_sample_info(sample_info, counts) == []

    dup = pd.concat([sample_info, sample_info.head(1)])
    errors = validate_sample_info(dup, None)
    assert "Duplicated sample ID: 'A'" in errors
    assert "No count data available" in errors

    assert validate_sample_info(pd.DataFrame({"id": ["A"]}), counts) == [
        "Sample information is missing the 'sample' column"
    ]
