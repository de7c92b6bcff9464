"""대시보드 입력을 위한 간단한 스키마 보조 모듈."""

from __future__ import annotations

import json
from typing import Any, Dict, List


def parse_env(text: str) -> Dict[str, str]:
    # KEY=VALUE 줄 또는 JSON 객체 입력을 환경 변수 딕셔너리로 변환한다.
    raw = (text or "").strip()
    if not raw:
        return {}
    if raw.startswith("{"):
        value = json.loads(raw)
        if not isinstance(value, dict):
            raise ValueError("JSON 객체만 허용됩니다.")
        return {str(key): str(item) for key, item in value.items()}
    env: Dict[str, str] = {}
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ValueError(f"KEY=VALUE 형식이 아닙니다: {line}")
        key, value = line.split("=", 1)
        env[key.strip()] = value.strip()
    return env


def summary_rows(report: Dict[str, Any]) -> List[Dict[str, Any]]:
    # 분석 리포트를 공급자/소스별 취약점 요약 행으로 펼친다.
    rows: List[Dict[str, Any]] = []
    for provider, data in sorted((report.get("providers") or {}).items()):
        if provider == "trusted-content":
            continue
        for source, source_data in sorted((data.get("sources") or {}).items()):
            summary = source_data.get("summary") or {}
            rows.append(
                {
                    "provider": provider,
                    "source": source,
                    "total": summary.get("total", 0),
                    "direct": summary.get("direct", 0),
                    "transitive": summary.get("transitive", 0),
                    "critical": summary.get("critical", 0),
                    "high": summary.get("high", 0),
                    "medium": summary.get("medium", 0),
                    "low": summary.get("low", 0),
                }
            )
    return rows
