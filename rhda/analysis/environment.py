"""이 파일은 .py 환경 전달 모듈로 빌드 환경 변수를 분석 클라이언트 환경으로 옮깁니다.

분석 클라이언트 설정은 프로세스 전역 상태가 아니라 호출마다 새로 만든 환경 딕셔너리로
전달됩니다. 같은 프로세스에서 빌드 여러 개가 동시에 실행되어도 서로의 도구 경로나
토큰을 덮어쓰지 않습니다.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional

from rhda.core.config import RHDA_SOURCE

FORWARDED_ENV_VARS = (
    # 패키지 매니저 도구 경로
    "EXHORT_MVN_PATH",
    "EXHORT_NPM_PATH",
    "EXHORT_GO_PATH",
    "EXHORT_GRADLE_PATH",
    "EXHORT_PYTHON3_PATH",
    "EXHORT_PIP3_PATH",
    "EXHORT_PYTHON_PATH",
    "EXHORT_PIP_PATH",
    # 분석 서비스 엔드포인트
    "EXHORT_URL",
    # 인증 정보
    "EXHORT_SNYK_TOKEN",
    "EXHORT_OSS_INDEX_USER",
    "EXHORT_OSS_INDEX_TOKEN",
    # 이미지 분석 도구
    "EXHORT_SYFT_PATH",
    "EXHORT_SYFT_CONFIG_PATH",
    "EXHORT_SKOPEO_PATH",
    "EXHORT_SKOPEO_CONFIG_PATH",
    "EXHORT_DOCKER_PATH",
    "EXHORT_PODMAN_PATH",
    "EXHORT_IMAGE_PLATFORM",
)

TOKEN_KEY = "RHDA_TOKEN"
SOURCE_KEY = "RHDA_SOURCE"
CONSENT_KEY = "CONSENT_TELEMETRY"


def build_client_env(
    build_env: Mapping[str, str],
    uuid: str,
    consent_telemetry: bool,
    base_env: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    # 기준 환경에서 전달 대상 키를 모두 지운 뒤 빌드 환경에 있는 값만 다시 채운다.
    env = dict(os.environ if base_env is None else base_env)
    for key in FORWARDED_ENV_VARS:
        env.pop(key, None)
        value = build_env.get(key)
        if value is not None:
            env[key] = value

    # 빌드 잡의 PATH가 있으면 도구 탐색에 그 값을 쓴다.
    if build_env.get("PATH"):
        env["PATH"] = build_env["PATH"]

    env[TOKEN_KEY] = uuid
    env[SOURCE_KEY] = RHDA_SOURCE
    env[CONSENT_KEY] = "true" if consent_telemetry else "false"
    return env
