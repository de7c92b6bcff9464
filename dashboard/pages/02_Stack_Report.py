"""RHDA Stack Report 조회 페이지."""

from __future__ import annotations

import os

import streamlit as st
import streamlit.components.v1 as components

from lib.api_client import APIClient
from lib.schemas import summary_rows


def main() -> None:
    st.header("RHDA Stack Report")

    api_base_url = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
    client = APIClient(api_base_url)

    build_id = st.number_input("build_id", min_value=1, step=1, value=1)
    if not st.button("리포트 조회"):
        return

    try:
        action = client.get_stack_report(int(build_id))
    except Exception as exc:
        st.error(str(exc))
        return

    st.caption(f"uuid={action.get('uuid')} jobtype={action.get('jobtype')}")
    if action.get("report"):
        report = action["report"]
        scanned = report.get("scanned") or {}
        cols = st.columns(3)
        cols[0].metric("Total Scanned", scanned.get("total", 0))
        cols[1].metric("Direct", scanned.get("direct", 0))
        cols[2].metric("Transitive", scanned.get("transitive", 0))
        st.dataframe(summary_rows(report), use_container_width=True)

    for entry in action.get("report_map") or []:
        label = entry.get("image")
        if entry.get("platform"):
            label = f"{label} ({entry['platform']})"
        st.subheader(f"Image: {label}")
        st.dataframe(summary_rows(entry.get("report") or {}), use_container_width=True)

    try:
        html = client.get_artifact(int(build_id))
    except Exception as exc:
        st.warning(str(exc))
        return
    st.download_button(
        "HTML 리포트 다운로드",
        data=html,
        file_name="dependency-analytics-report.html",
        mime="text/html",
    )
    components.html(html.decode("utf-8", errors="replace"), height=800, scrolling=True)


if __name__ == "__main__":
    main()
