"""이 파일은 .py 빌드 콘솔 모듈로 빌드별 콘솔 로그 출력을 담당합니다."""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Optional, TextIO

from .config import CONSOLE_DIR

logger = logging.getLogger(__name__)


def console_path(build_id: int, console_dir: Optional[Path] = None) -> Path:
    return (console_dir or CONSOLE_DIR) / f"{build_id}.log"


class BuildConsole:
    """빌드 콘솔 스트림 래퍼입니다.

    스텝이 출력하는 줄은 빌드 사용자가 보는 콘솔 계약이므로 포맷을 바꾸지 않고 그대로
    기록하며, 호스트 로그에는 DEBUG로만 복사합니다.
    """

    def __init__(self, stream: TextIO, owns_stream: bool = False) -> None:
        self.stream = stream
        self._owns_stream = owns_stream

    @classmethod
    def open(cls, build_id: int, console_dir: Optional[Path] = None) -> "BuildConsole":
        # 실행마다 빌드 ID별 로그 파일을 새로 쓴다.
        path = console_path(build_id, console_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        return cls(path.open("w", encoding="utf-8"), owns_stream=True)

    def println(self, message: str = "") -> None:
        self.stream.write(f"{message}\n")
        self.stream.flush()
        logger.debug("console: %s", message)

    def print_exception(self, exc: BaseException) -> None:
        # 진단을 위해 원인 체인을 포함한 전체 트레이스백을 남긴다.
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=self.stream)
        self.stream.flush()

    def close(self) -> None:
        if self._owns_stream:
            self.stream.close()

    def __enter__(self) -> "BuildConsole":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
