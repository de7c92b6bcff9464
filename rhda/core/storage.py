"""이 파일은 .py 저장 경로 모듈로 빌드 아티팩트 보관 디렉터리를 관리합니다."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from .config import ARTIFACTS_DIR
from .errors import PublishError


def ensure_artifacts_dir(build_id: int, root: Optional[Path] = None) -> Path:
    # 빌드별 아티팩트 저장 경로를 생성한다.
    path = (root or ARTIFACTS_DIR) / str(build_id)
    path.mkdir(parents=True, exist_ok=True)
    return path


class ArtifactArchiver:
    # 워크스페이스 기준 상대 경로의 파일을 빌드 아티팩트로 보관한다.
    def __init__(self, artifact: str) -> None:
        self.artifact = artifact

    def perform(self, workspace: Path, artifacts_dir: Path) -> Path:
        source = Path(workspace) / self.artifact
        if not source.is_file():
            raise PublishError(f"No artifacts found that match the file pattern \"{self.artifact}\"")
        destination = Path(artifacts_dir) / self.artifact
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            shutil.copy2(source, destination)
        except OSError as exc:
            raise PublishError(f"Failed to archive {self.artifact}: {exc}") from exc
        return destination
