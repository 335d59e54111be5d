# interface/backend/settings.py

import logging
import os
from dataclasses import dataclass

import streamlit as st

ENV_PREFIX = "RNASEQVIS_"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(ENV_PREFIX + name)
    try:
        return int(value) if value is not None else default
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s%s=%r", ENV_PREFIX, name, value)
        return default


@dataclass(frozen=True)
class AppSettings:
    debug: bool = False
    log_level: str = "INFO"
    preview_rows: int = 5
    max_heatmap_genes: int = 200


def load_settings() -> AppSettings:
    debug = _env_flag("DEBUG")
    return AppSettings(
        debug=debug,
        log_level=os.environ.get(ENV_PREFIX + "LOG_LEVEL", "DEBUG" if debug else "INFO"),
        preview_rows=_env_int("PREVIEW_ROWS", 5),
        max_heatmap_genes=_env_int("MAX_HEATMAP_GENES", 200),
    )


def configure_logging(settings: AppSettings):
    """Configure root logging once per browser session."""
    if st.session_state.get("_log_configured"):
        return
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("rnaseq_pipeline").setLevel(level)
    logging.getLogger("interface").setLevel(level)
    st.session_state["_log_configured"] = True
