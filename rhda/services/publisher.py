"""이 파일은 .py 결과 게시 모듈로 HTML 보고서 저장/보관과 결과 액션 생성을 담당합니다."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from rhda.analysis.invocation import AnalysisOutcome
from rhda.core.config import REPORT_FILE_NAME
from rhda.core.errors import PublishError
from rhda.core.storage import ArtifactArchiver, ensure_artifacts_dir
from rhda.core.types import ResultAction, StepContext

logger = logging.getLogger(__name__)


def save_html_report(html: bytes, workspace: Path) -> Path:
    # 워크스페이스 루트의 고정 파일 이름으로 HTML 보고서를 쓴다.
    path = Path(workspace) / REPORT_FILE_NAME
    try:
        path.write_bytes(html)
    except OSError as exc:
        raise PublishError(f"Failed to write {path}: {exc}") from exc
    return path


def serialize_report_map(outcome: AnalysisOutcome) -> List[Dict[str, Any]]:
    # ImageRef 키는 JSON 키가 될 수 없으므로 항목 목록으로 바꾼다.
    items = sorted((outcome.report_map or {}).items(), key=lambda item: (item[0].name, item[0].platform or ""))
    return [
        {"image": ref.name, "platform": ref.platform, "report": report.to_json()}
        for ref, report in items
    ]


def publish(context: StepContext, outcome: AnalysisOutcome, jobtype: str) -> ResultAction:
    """HTML 아티팩트와 결과 액션을 함께 게시합니다.

    HTML 쓰기나 보관이 실패하면 워크스페이스에 남은 파일을 지우고 PublishError를
    올리므로, 아티팩트 없이 구조화 보고서만 게시되는 일은 없습니다.
    """
    report_path = save_html_report(outcome.html, context.workspace)
    try:
        artifacts_dir = context.artifacts_dir or ensure_artifacts_dir(context.build_id or 0)
        ArtifactArchiver(REPORT_FILE_NAME).perform(context.workspace, artifacts_dir)
    except (PublishError, OSError) as exc:
        report_path.unlink(missing_ok=True)
        if isinstance(exc, PublishError):
            raise
        raise PublishError(f"Failed to archive {REPORT_FILE_NAME}: {exc}") from exc
    context.console.println(
        "You can find the latest detailed HTML report in your workspace and in your build under Build Artifacts."
    )
    logger.info("Archived %s for build %s", REPORT_FILE_NAME, context.build_id)

    if outcome.report is not None:
        return ResultAction(
            uuid=context.uuid,
            url=str(report_path),
            jobtype=jobtype,
            report=outcome.report.to_json(),
        )
    return ResultAction(
        uuid=context.uuid,
        url=str(report_path),
        jobtype=jobtype,
        report_map=serialize_report_map(outcome),
    )
