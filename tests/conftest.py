"""이 파일은 .py 테스트 설정 모듈로 경로와 공용 픽스처를 초기화합니다."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rhda.analysis.report import AnalysisReport  # noqa: E402
from rhda.db.base import Base  # noqa: E402
from rhda.db import models  # noqa: E402,F401


def make_report(total: int = 0, critical: int = 0, high: int = 0) -> Dict[str, Any]:
    # 분석 서비스 JSON 응답 모양의 보고서를 만든다.
    return {
        "scanned": {"total": 3, "direct": 1, "transitive": 2},
        "providers": {
            "rhtpa": {
                "status": {"ok": True, "name": "rhtpa", "code": 200, "message": "OK"},
                "sources": {
                    "osv": {
                        "summary": {
                            "direct": total,
                            "transitive": 0,
                            "total": total,
                            "critical": critical,
                            "high": high,
                            "medium": 0,
                            "low": 0,
                        },
                        "dependencies": [],
                    }
                },
            },
            "trusted-content": {
                "status": {"ok": True, "name": "trusted-content", "code": 200, "message": "OK"},
                "sources": {"redhat": {"summary": {"total": 9}}},
            },
        },
    }


class FakeClient:
    """ExhortClient 대신 고정 응답을 돌려주는 테스트용 클라이언트입니다."""

    def __init__(
        self,
        env: Optional[Dict[str, str]] = None,
        report: Optional[Dict[str, Any]] = None,
        image_reports: Optional[Dict[str, Dict[str, Any]]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.env = env
        self.report = report if report is not None else make_report()
        self.image_reports = image_reports or {}
        self.error = error
        self.calls: List[tuple] = []

    def _check(self, name: str, target) -> None:
        self.calls.append((name, target))
        if self.error is not None:
            raise self.error

    def stack_analysis(self, manifest):
        self._check("stack", manifest)
        return AnalysisReport.from_json(self.report)

    def stack_analysis_html(self, manifest):
        self._check("stack_html", manifest)
        return b"<html>stack</html>"

    def image_analysis(self, refs):
        self._check("image", refs)
        return {ref: AnalysisReport.from_json(self.image_reports.get(ref.name, make_report())) for ref in refs}

    def image_analysis_html(self, refs):
        self._check("image_html", refs)
        return b"<html>image</html>"


@pytest.fixture
def client_factory():
    # 생성된 FakeClient를 기록하고 응답 설정을 바꿀 수 있는 팩토리이다.
    created: List[FakeClient] = []
    options: Dict[str, Any] = {}

    def factory(env=None):
        client = FakeClient(env=env, **options)
        created.append(client)
        return client

    factory.created = created
    factory.options = options
    return factory


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def workspace(tmp_path):
    path = tmp_path / "workspace"
    path.mkdir()
    return path
