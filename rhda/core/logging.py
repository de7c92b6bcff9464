"""이 파일은 .py 로깅 초기화 모듈로 기본 로그 포맷을 설정합니다."""

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None) -> None:
    # 명시한 레벨이 없으면 RHDA_LOG_LEVEL 환경 변수를 따른다.
    logging.basicConfig(
        level=level or os.getenv("RHDA_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # 대시보드/API 클라이언트의 연결 로그는 경고 이상만 남긴다.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
