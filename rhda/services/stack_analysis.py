"""이 파일은 .py 스택 분석 서비스 모듈로 두 스텝이 공유하는 분석 흐름을 제공합니다."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from rhda.adapters.exhort import ExhortClient
from rhda.analysis.environment import build_client_env
from rhda.analysis.formatter import print_image_report, print_report
from rhda.analysis.invocation import AnalysisOutcome, resolve_manifest, run_analysis
from rhda.core.types import ResultAction, StepContext

from .publisher import publish

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    outcome: AnalysisOutcome
    action: ResultAction

    @property
    def vulnerable(self) -> bool:
        return self.outcome.total_vulnerabilities > 0


def analyze(context: StepContext, jobtype: str) -> Optional[AnalysisResult]:
    """매니페스트를 분석하고 콘솔 출력과 아티팩트 게시까지 마친 결과를 돌려줍니다.

    흐름: 환경 구성 → 파일 확인 → 분석 대기 → 콘솔 출력/HTML 저장 → 액션 생성.
    파일이 없으면 ManifestNotFoundError, 분석 실패는 AnalysisExecutionError, 게시 실패는
    PublishError가 올라오며 어떤 경우에도 부분 결과는 만들지 않습니다. Dockerfile에
    베이스 이미지가 없으면 None입니다.
    """
    consent = bool(context.config.get("consentTelemetry", False))
    env = build_client_env(context.env, context.uuid, consent)
    client = (context.client_factory or ExhortClient)(env=env)

    manifest_path = resolve_manifest(str(context.config["file"]), context.workspace)
    outcome = run_analysis(manifest_path, client, context.console)
    if outcome is None:
        return None

    if outcome.report is not None:
        print_report(outcome.report, context.console)
    else:
        for ref in sorted(outcome.report_map or {}, key=lambda item: (item.name, item.platform or "")):
            print_image_report(ref, outcome.report_map[ref], context.console)

    action = publish(context, outcome, jobtype)
    context.console.println("Click on the RHDA Stack Report icon to view the detailed report.")
    context.console.println("----- RHDA Analysis Ends -----")
    logger.info(
        "Analysis of %s finished with %d vulnerabilities",
        manifest_path,
        outcome.total_vulnerabilities,
    )
    return AnalysisResult(outcome=outcome, action=action)
