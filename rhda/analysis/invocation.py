"""이 파일은 .py 분석 호출 모듈로 매니페스트 분석과 이미지 분석 중 하나를 선택해 실행합니다."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from rhda.core.console import BuildConsole
from rhda.core.errors import AnalysisExecutionError, ManifestNotFoundError

from .dockerfile import DockerfileImages, ImageRef, is_dockerfile
from .report import AnalysisReport

if TYPE_CHECKING:
    from rhda.adapters.exhort import ExhortClient

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "The specified file or path does not exist or is inaccessible. "
    "Please configure the build properly and retry."
)


@dataclass
class AnalysisOutcome:
    # report(매니페스트) 또는 report_map(이미지) 중 하나만 채워진다.
    html: bytes
    report: Optional[AnalysisReport] = None
    report_map: Optional[Dict[ImageRef, AnalysisReport]] = None

    @property
    def total_vulnerabilities(self) -> int:
        if self.report is not None:
            return self.report.total_vulnerabilities()
        return sum(report.total_vulnerabilities() for report in (self.report_map or {}).values())


def resolve_manifest(file: str, workspace: Path) -> Path:
    # 상대 경로는 워크스페이스 기준으로 찾는다.
    path = Path(file)
    if not path.is_absolute():
        path = Path(workspace) / file
    if not path.exists():
        raise ManifestNotFoundError(NOT_FOUND_MESSAGE)
    return path


def run_analysis(
    manifest_path: Path,
    client: "ExhortClient",
    console: BuildConsole,
) -> Optional[AnalysisOutcome]:
    """분석을 실행하고 끝날 때까지 기다립니다.

    Dockerfile이면 베이스 이미지 분석, 그 외에는 스택 분석을 수행합니다. Dockerfile에서
    이미지를 하나도 찾지 못하면 분석 없이 None을 반환합니다. 분석 실패는 원인을 담은
    AnalysisExecutionError로 전달됩니다.
    """
    try:
        container_build = is_dockerfile(manifest_path)
    except (OSError, ValueError) as exc:
        raise AnalysisExecutionError(f"Cannot read {manifest_path}: {exc}") from exc

    if not container_build:
        logger.info("Running stack analysis for %s", manifest_path)
        report, html = _await_pair(client.stack_analysis, client.stack_analysis_html, str(manifest_path))
        return AnalysisOutcome(html=html, report=report)

    # JSON/HTML 호출이 각자 순회하므로 다시 읽을 수 있는 컬렉션을 넘긴다.
    refs = DockerfileImages(manifest_path)
    if not refs:
        console.println("No base images found in the Dockerfile.")
        logger.info("No base images found in %s", manifest_path)
        return None
    logger.info("Running image analysis for %d base images", len(refs))
    report_map, html = _await_pair(client.image_analysis, client.image_analysis_html, refs)
    return AnalysisOutcome(html=html, report_map=report_map)


def _await_pair(json_call, html_call, target):
    # JSON/HTML 두 호출을 동시에 띄우고 둘 다 끝날 때까지 호출 스레드를 막는다.
    with ThreadPoolExecutor(max_workers=2) as pool:
        json_future = pool.submit(json_call, target)
        html_future = pool.submit(html_call, target)
        try:
            return json_future.result(), html_future.result()
        except Exception as exc:
            raise AnalysisExecutionError(f"Analysis failed: {exc}") from exc
