"""이 파일은 .py 빌드 스텝 플러그인 모듈로 매니페스트 분석 후 결과 액션을 첨부합니다."""

from __future__ import annotations

import logging
from typing import Optional

from rhda.core.errors import AnalysisExecutionError, PublishError
from rhda.core.plugin_base import BaseStep
from rhda.services.stack_analysis import analyze

logger = logging.getLogger(__name__)


class RhdaBuilder(BaseStep):
    def perform(self) -> Optional[str]:
        console = self.context.console
        console.println("----- RHDA Analysis Begins -----")
        # ManifestNotFoundError는 그대로 올려 빌드 스텝을 중단시킨다.
        try:
            result = analyze(self.context, self.jobtype)
        except (AnalysisExecutionError, PublishError) as exc:
            console.println("error")
            console.print_exception(exc)
            logger.exception("RHDA analysis failed for build %s", self.context.build_id)
            self.failed = True
            return None

        if result is not None:
            self.attach_action(result.action)
        return None
