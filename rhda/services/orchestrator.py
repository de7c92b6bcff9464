"""이 파일은 .py 오케스트레이터 서비스 모듈로 스텝 목록과 대기 빌드 실행 흐름을 제공합니다."""

import logging
from pathlib import Path
from typing import List, Optional

from rhda.core.config import PLUGINS_DIR
from rhda.core.errors import ManifestNotFoundError
from rhda.core.plugin_loader import PluginLoader, PluginMeta
from rhda.db import models
from rhda.db.session import init_db, session_scope

from .step_executor import StepExecutor

logger = logging.getLogger(__name__)


class Orchestrator:
    def __init__(self, plugins_dir: Optional[Path] = None) -> None:
        self.plugins_dir = plugins_dir or PLUGINS_DIR
        self.loader = PluginLoader(self.plugins_dir)

    def list_plugins(self) -> List[PluginMeta]:
        return self.loader.discover()

    def run(self) -> None:
        plugins = self.list_plugins()
        logger.info("Discovered %d steps", len(plugins))
        for meta in plugins:
            logger.info("- %s (%s): %s", meta.plugin_id, meta.plugin_type, meta.display_name)
        init_db()
        self.run_pending()

    def run_pending(self) -> int:
        # 대기 중인 빌드를 한 번에 하나씩 순서대로 실행한다.
        executed = 0
        with session_scope() as session:
            executor = StepExecutor(session, plugins_dir=self.plugins_dir)
            pending = (
                session.query(models.Build)
                .filter(models.Build.status == "PENDING")
                .order_by(models.Build.id.asc())
                .all()
            )
            for build in pending:
                try:
                    executor.run_build(build)
                except ManifestNotFoundError:
                    # 빌드는 이미 FAILED로 기록되었고 다음 빌드로 넘어간다.
                    pass
                executed += 1
        return executed
