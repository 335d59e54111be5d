import json

import pandas as pd
import pytest

from interface.backend.session_io import reset_session, session_from_dict, session_json, session_to_dict
from rnaseq_pipeline.loaders import get_counts, get_gene_metadata


def test_session_export_and_import(sample_info, rnaseq_data):
    counts = get_counts(rnaseq_data).astype(float)
    counts.loc["g1", "A"] = float("nan")
    state = {
        "heatmap_config": {"transform": "Log10", "gene_count": 10},
        "sample_info_df": sample_info,
        "counts_df": counts,
        "gene_metadata_df": get_gene_metadata(rnaseq_data),
    }

    exported = json.loads(json.dumps(session_to_dict(state)))
    restored = session_from_dict(exported)

    assert restored["heatmap_config"]["transform"] == "Log10"
    pd.testing.assert_frame_equal(restored["sample_info_df"], sample_info)
    pd.testing.assert_frame_equal(restored["counts_df"], counts)
    pd.testing.assert_frame_equal(restored["gene_metadata_df"], state["gene_metadata_df"])


def test_empty_session_exports_nulls():
    exported = session_to_dict({})
    assert exported["counts"] is None
    assert session_from_dict(exported)["counts_df"] is None


def test_unknown_session_version():
    with pytest.raises(ValueError, match="Unsupported session version"):
        session_from_dict({"version": 99})


def test_reset_session_keeps_settings(sample_info, rnaseq_data):
    state = {
        "settings": "kept",
        "heatmap_config": {"transform": "Log10"},
        "sample_info_df": sample_info,
        "counts_df": get_counts(rnaseq_data),
        "gene_metadata_df": get_gene_metadata(rnaseq_data),
        "rnaseqData-testdata": True,
        "rnaseqData-result": object(),
    }

    reset_session(state)

    assert state == {
        "settings": "kept",
        "sample_info_df": None,
        "counts_df": None,
        "gene_metadata_df": None,
    }


def test_session_json_is_importable(sample_info):
    exported = json.loads(session_json({"sample_info_df": sample_info}))

    assert exported["counts"] is None
    pd.testing.assert_frame_equal(session_from_dict(exported)["sample_info_df"], sample_info)
