"""이 파일은 .py SCA 어댑터로 외부 분석 도구 실행을 래핑합니다."""

from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import List, Mapping, Optional

from rhda.core.errors import AdapterError


@dataclass
class ToolResult:
    exit_code: int
    stdout: str
    stderr: str


class ScaRunner:
    # timeout이 None이면 외부 도구가 끝날 때까지 기다린다.
    def __init__(self, timeout: Optional[int] = None) -> None:
        self.timeout = timeout

    def run(
        self,
        command: List[str],
        cwd: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> ToolResult:
        # env는 호출 단위로 구성된 환경이며 부모 프로세스 환경을 바꾸지 않는다.
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
                cwd=cwd,
                env=dict(env) if env is not None else None,
            )
        except subprocess.TimeoutExpired as exc:
            raise AdapterError("SCA command timeout") from exc
        except OSError as exc:
            raise AdapterError(f"SCA execution failed: {exc}") from exc

        return ToolResult(result.returncode, result.stdout, result.stderr)
