"""RHDA 분석 빌드 생성/실행 페이지."""

from __future__ import annotations

import os

import streamlit as st

from lib.api_client import APIClient
from lib.schemas import parse_env


def main() -> None:
    st.header("빌드 실행")

    api_base_url = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")
    client = APIClient(api_base_url)

    try:
        steps = client.list_steps()
    except Exception as exc:
        st.error(str(exc))
        return
    step_ids = [step["id"] for step in steps]
    if not step_ids:
        st.warning("등록된 스텝이 없습니다.")
        return

    st.subheader("빌드 목록")
    list_status = st.selectbox("status", ["", "PENDING", "RUNNING", "COMPLETED", "FAILED"])
    if st.button("빌드 목록 조회"):
        try:
            result = client.list_builds(status=list_status or None)
            st.dataframe(result, use_container_width=True)
        except Exception as exc:
            st.error(str(exc))

    st.subheader("빌드 생성")
    step_id = st.selectbox("스텝", step_ids)
    file = st.text_input("Manifest file location", value="package.json")
    if step_id:
        try:
            check = client.check_file(step_id, file)
            if check.get("kind") == "error":
                st.error(check.get("message"))
        except Exception as exc:
            st.error(str(exc))

    with st.form("create_build"):
        job_name = st.text_input("job_name", value="")
        workspace = st.text_input("workspace", value=os.getcwd())
        consent = st.checkbox("Usage Statistics (consentTelemetry)", value=False)
        env_text = st.text_area(
            "빌드 환경 변수 (KEY=VALUE 또는 JSON)",
            value="EXHORT_DEBUG=false",
            height=150,
        )
        run_now = st.checkbox("즉시 실행(run_now)", value=True)
        submitted = st.form_submit_button("빌드 생성")

    if submitted:
        try:
            payload = {
                "step_id": step_id,
                "job_name": job_name.strip() or None,
                "workspace": workspace,
                "config": {"file": file, "consentTelemetry": consent},
                "env": parse_env(env_text),
                "run_now": run_now,
            }
            result = client.create_build(payload)
            st.success(f"빌드 생성 완료: id={result.get('id')} status={result.get('status')}")
            st.json(result)
        except Exception as exc:
            st.error(str(exc))

    st.subheader("빌드 수동 실행")
    build_id = st.number_input("build_id", min_value=1, step=1, value=1, key="build_run_id")
    if st.button("실행"):
        try:
            st.json(client.run_build(int(build_id)))
        except Exception as exc:
            st.error(str(exc))

    st.subheader("빌드 상태 및 콘솔")
    status_id = st.number_input("build_id", min_value=1, step=1, value=1, key="build_status_id")
    if st.button("상태 조회"):
        try:
            st.json(client.get_build_status(int(status_id)))
            st.code(client.get_console(int(status_id)) or "(empty)", language="text")
        except Exception as exc:
            st.error(str(exc))


if __name__ == "__main__":
    main()
