from pathlib import Path

import pandas as pd
from streamlit.testing.v1 import AppTest

from rnaseq_pipeline.loaders import bundled_data_paths, get_gene_metadata, load_rnaseq_data, load_rnaseq_samples
from rnaseq_pipeline.processor import get_normalised_counts

INTERFACE_DIR = Path(__file__).resolve().parents[1] / "interface"


def test_upload_page_waits_for_files():
    at = AppTest.from_file(str(INTERFACE_DIR / "upload.py"), default_timeout=30)
    at.run()

    assert not at.exception
    assert at.session_state["counts_df"] is None
    assert len(at.dataframe) == 0


def test_upload_page_with_test_data():
    at = AppTest.from_file(str(INTERFACE_DIR / "upload.py"), default_timeout=30)
    at.run()
    at.checkbox(key="rnaseqData-testdata").check().run()

    assert not at.exception
    assert not [w for w in at.warning if "Sample IDs" in w.value]
    assert at.session_state["counts_df"].shape == (30, 8)
    assert at.session_state["sample_info_df"]["sample"].tolist()[:2] == ["wt-1", "wt-2"]
    assert len(at.dataframe) == 3


def test_heatmap_page_without_data():
    at = AppTest.from_file(str(INTERFACE_DIR / "heatmap_viewer.py"), default_timeout=30)
    at.run()

    assert not at.exception
    assert at.info[0].value == "Please upload sample and count data first."


def test_heatmap_page_with_data():
    sample_path, count_path = bundled_data_paths()
    sample_info = load_rnaseq_samples(sample_path)
    rnaseq_data = load_rnaseq_data(count_path)

    at = AppTest.from_file(str(INTERFACE_DIR / "heatmap_viewer.py"), default_timeout=30)
    at.session_state["sample_info_df"] = sample_info
    at.session_state["counts_df"] = get_normalised_counts(rnaseq_data, sample_info)
    at.session_state["gene_metadata_df"] = get_gene_metadata(rnaseq_data)
    at.run()

    assert not at.exception
    assert len(at.get("plotly_chart")) == 1
    assert at.caption[0].value.startswith("2 gene(s) with zero variance")

    at.radio[0].set_value("Log10").run()
    assert not at.exception
    assert at.session_state["heatmap_config"]["transform"] == "Log10"


def test_heatmap_page_with_one_variable_gene():
    sample_info = pd.DataFrame({"sample": ["A", "B"], "condition": ["ctrl", "mut"]})
    counts = pd.DataFrame({"A": [1.0, 5.0], "B": [2.0, 5.0]}, index=pd.Index(["g1", "g2"], name="GeneID"))

    at = AppTest.from_file(str(INTERFACE_DIR / "heatmap_viewer.py"), default_timeout=30)
    at.session_state["sample_info_df"] = sample_info
    at.session_state["counts_df"] = counts
    at.session_state["gene_metadata_df"] = pd.DataFrame({"GeneID": ["g1", "g2"]})
    at.run()

    assert not at.exception
    assert len(at.slider) == 0
    assert at.session_state["heatmap_config"]["gene_count"] == 1
    assert len(at.get("plotly_chart")) == 1


def test_rejected_upload_clears_earlier_data(tmp_path, monkeypatch):
    sample_file = tmp_path / "samples.tsv"
    sample_file.write_text("sample\tcondition\nX\tctrl\nY\tmut\n")
    count_file = tmp_path / "counts.tsv"
    count_file.write_text("GeneID\tA count\tB count\ng1\t1\t2\ng2\t3\t4\n")
    monkeypatch.setattr(
        "interface.components.upload_rnaseq.bundled_data_paths",
        lambda: (sample_file, count_file),
    )

    at = AppTest.from_file(str(INTERFACE_DIR / "upload.py"), default_timeout=30)
    at.session_state["sample_info_df"] = pd.DataFrame({"sample": ["old"]})
    at.session_state["counts_df"] = pd.DataFrame({"old": [1.0]})
    at.session_state["gene_metadata_df"] = pd.DataFrame({"GeneID": ["g0"]})
    at.run()
    assert at.session_state["counts_df"] is not None

    at.checkbox(key="rnaseqData-testdata").check().run()

    assert not at.exception
    assert at.error[0].value.startswith("**Sample IDs missing from counts**")
    assert at.session_state["sample_info_df"] is None
    assert at.session_state["counts_df"] is None
    assert at.session_state["gene_metadata_df"] is None
