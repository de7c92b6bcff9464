"""이 파일은 .py 타입 정의 모듈로 스텝 실행 컨텍스트와 결과 액션 모델을 제공합니다."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from .config import ACTION_DISPLAY_NAME, ACTION_ICON_FILE_NAME, ACTION_URL_NAME

if TYPE_CHECKING:
    from rhda.adapters.exhort import ExhortClient
    from .console import BuildConsole


@dataclass
class StepContext:
    # 스텝이 실행될 때 전달되는 빌드 단위 컨텍스트이다.
    workspace: Path
    console: "BuildConsole"
    # plugin.yml의 config_schema로 검증된 설정값을 전달한다.
    config: Dict = field(default_factory=dict)
    # 빌드 잡 환경 변수이며 분석 클라이언트 환경 구성의 입력이 된다.
    env: Dict[str, str] = field(default_factory=dict)
    # 설치 단위 상관관계 UUID이다.
    uuid: str = ""
    # Build ID는 아티팩트/콘솔 저장 경로에 사용된다.
    build_id: Optional[int] = None
    artifacts_dir: Optional[Path] = None
    # 테스트나 다른 호스트에서 분석 클라이언트를 주입할 때 사용한다(env 키워드 인자를 받는다).
    client_factory: Optional[Callable[..., "ExhortClient"]] = None


@dataclass(frozen=True)
class ResultAction:
    # 빌드에 첨부되는 결과 액션으로 생성 후 변경하지 않는다.
    uuid: str
    url: str
    jobtype: str
    report: Optional[Dict[str, Any]] = None
    # 이미지 분석일 때 {image, platform, report} 목록을 담는다.
    report_map: Optional[List[Dict[str, Any]]] = None

    display_name = ACTION_DISPLAY_NAME
    url_name = ACTION_URL_NAME
    icon_file_name = ACTION_ICON_FILE_NAME
