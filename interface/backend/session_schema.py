# interface/backend/session_schema.py

from typing import TypedDict, Optional


class HeatmapConfig(TypedDict):
    transform: str
    gene_count: int
    genes: list[str]
    sort_by: Optional[str]
    colour_scale: str
    show_gene_labels: bool
    show_sample_labels: bool
