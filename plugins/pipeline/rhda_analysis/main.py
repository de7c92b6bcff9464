"""이 파일은 .py 파이프라인 스텝 플러그인 모듈로 분석 결과를 종료 상태 문자열로 돌려줍니다."""

from __future__ import annotations

import logging

from rhda.core.config import EXIT_FAILED, EXIT_SUCCESS, EXIT_VULNERABLE
from rhda.core.errors import AnalysisExecutionError, ManifestNotFoundError, PublishError
from rhda.core.plugin_base import BaseStep
from rhda.services.stack_analysis import analyze

logger = logging.getLogger(__name__)


class RhdaAnalysisStep(BaseStep):
    def perform(self) -> str:
        console = self.context.console
        console.println("Red Hat Dependency Analytics Begin")
        try:
            result = analyze(self.context, self.jobtype)
        except ManifestNotFoundError as exc:
            # 파일이 없으면 분석을 시도하지 않고 실패 상태를 돌려준다.
            console.println(str(exc))
            return EXIT_FAILED
        except (AnalysisExecutionError, PublishError) as exc:
            # 원인과 무관하게 콘솔/호스트 로그에 진단을 남기고 공통 상태로 처리한다.
            console.println("error")
            console.print_exception(exc)
            logger.exception("RHDA analysis failed for build %s", self.context.build_id)
            self.failed = True
            return EXIT_VULNERABLE

        if result is None:
            return EXIT_SUCCESS
        self.attach_action(result.action)
        return EXIT_VULNERABLE if result.vulnerable else EXIT_SUCCESS
