import streamlit as st

from interface.backend.session import initialize_session_state

st.set_page_config(page_title="RNA-seq Visualisation", layout="wide")

__VERSION__="1.0.0"
__COMMENT__=""

from interface.backend.session_io import (
    session_export_button,
    session_import_button,
    session_restart_button
)

def main():
    initialize_session_state()

    custom_pages = {"RNA-seq": []}

    custom_pages["RNA-seq"].append(
        st.Page("interface/home.py", title="Home", icon=":material/info:")
    )

    custom_pages["RNA-seq"].append(
        st.Page("interface/upload.py", title="Upload Data", icon=":material/upload_file:")
    )

    custom_pages["RNA-seq"].append(
        st.Page("interface/heatmap_viewer.py", title="Heatmap", icon=":material/grid_on:")
    )

    page = st.navigation(custom_pages)
    page.run()

    st.divider()

    with st.sidebar:
        st.caption("Session Options")
        col_import, col_export, col_del = st.columns([3, 3, 1])

        with col_import:
            session_import_button()

        with col_export:
            session_export_button()

        with col_del:
            session_restart_button()

    st.divider()
    st.caption(f"rnaseq-vis v {__VERSION__}{': ' + __COMMENT__ if __COMMENT__ else ''}")

if __name__ == "__main__":
    main()
