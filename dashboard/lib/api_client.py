"""API 호출을 담당하는 간단한 클라이언트."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


@dataclass
class APIClient:
    base_url: str
    timeout: int = 300

    def _url(self, path: str) -> str:
        # 상대 경로를 API_BASE_URL에 결합한다.
        return f"{self.base_url.rstrip('/')}{path}"

    def _send(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        # 공통 요청 래퍼(오류 메시지 포함).
        url = self._url(path)
        try:
            response = requests.request(
                method,
                url,
                json=payload,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RuntimeError(f"API 연결 실패: {exc}") from exc

        if response.status_code >= 400:
            detail = _safe_json(response.text)
            raise RuntimeError(f"API 오류 {response.status_code}: {detail}")
        return response

    def _request(self, method: str, path: str, payload=None, params=None) -> Any:
        response = self._send(method, path, payload, params)
        if not response.text:
            return {}
        return response.json()

    def _build_params(self, **kwargs: Any) -> Dict[str, Any]:
        # None 값은 제외하고 쿼리스트링을 구성한다.
        return {key: value for key, value in kwargs.items() if value is not None}

    def list_steps(self) -> Any:
        return self._request("GET", "/api/v1/steps")

    def check_file(self, step_id: str, file: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/v1/steps/{step_id}/check-file", params={"file": file})

    def create_build(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/v1/builds", payload)

    def run_build(self, build_id: int) -> Dict[str, Any]:
        return self._request("POST", f"/api/v1/builds/{build_id}/run")

    def list_builds(self, status: Optional[str] = None, limit: int = 100, offset: int = 0) -> Any:
        params = self._build_params(status=status, limit=limit, offset=offset)
        return self._request("GET", "/api/v1/builds", params=params)

    def get_build(self, build_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/v1/builds/{build_id}")

    def get_build_status(self, build_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/v1/builds/{build_id}/status")

    def get_console(self, build_id: int) -> str:
        return self._send("GET", f"/api/v1/builds/{build_id}/console").text

    def get_stack_report(self, build_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/v1/builds/{build_id}/stack_report")

    def get_artifact(self, build_id: int) -> bytes:
        return self._send("GET", f"/api/v1/builds/{build_id}/artifact").content


def _safe_json(text: str) -> str:
    # 응답이 JSON이면 detail만 추출하고 아니면 원문을 반환한다.
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return text
    return str(data.get("detail", data))
