"""이 파일은 .py 설정 모듈로 경로와 기본 위치, 외부 분석 도구 설정을 정의합니다."""

import os
from pathlib import Path
from typing import Optional

REPO_ROOT = Path(__file__).resolve().parents[2]
APP_DIR = REPO_ROOT / "rhda"
PLUGINS_DIR = REPO_ROOT / "plugins"
STORAGE_DIR = Path(os.getenv("RHDA_STORAGE_DIR", str(REPO_ROOT / "storage")))
ARTIFACTS_DIR = STORAGE_DIR / "artifacts"
CONSOLE_DIR = STORAGE_DIR / "console"
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{(STORAGE_DIR / 'rhda.db').as_posix()}",
)
API_PREFIX = "/api/v1"

# Exhort 분석 클라이언트 CLI 실행 파일 경로이다.
RHDA_CLI_PATH = os.getenv("RHDA_CLI_PATH", "exhort-javascript-api")
# 백엔드 텔레메트리에서 호출 출처를 구분하는 고정 태그이다.
RHDA_SOURCE = "python-ci-plugin"


def _read_timeout(raw: Optional[str]) -> Optional[int]:
    # 값이 없거나 0 이하이면 타임아웃 없이 대기한다.
    if not raw:
        return None
    value = int(raw)
    return value if value > 0 else None


ANALYSIS_TIMEOUT = _read_timeout(os.getenv("RHDA_ANALYSIS_TIMEOUT"))

# 파이프라인 스텝이 돌려주는 종료 상태 문자열이다.
EXIT_SUCCESS = "0"
EXIT_FAILED = "1"
EXIT_VULNERABLE = "2"

REPORT_FILE_NAME = "dependency-analytics-report.html"
ACTION_DISPLAY_NAME = "RHDA Stack Report"
ACTION_URL_NAME = "stack_report"
ACTION_ICON_FILE_NAME = "/plugin/redhat-dependency-analytics/icons/redhat.png"
