"""이 파일은 .py 스텝 실행 모듈로 빌드 하나의 스텝 실행과 결과 액션 저장을 담당합니다."""

from __future__ import annotations

from datetime import datetime
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from sqlalchemy.orm import Session

from rhda.core.config import EXIT_FAILED, PLUGINS_DIR, REPORT_FILE_NAME
from rhda.core.config_validation import apply_config_schema
from rhda.core.console import BuildConsole
from rhda.core.plugin_loader import PluginLoader, PluginMeta
from rhda.core.storage import ensure_artifacts_dir
from rhda.core.types import ResultAction, StepContext
from rhda.db import models

from .global_config import get_or_create_uuid

logger = logging.getLogger(__name__)


class StepExecutor:
    def __init__(
        self,
        session: Session,
        plugins_dir: Optional[Path] = None,
        artifacts_root: Optional[Path] = None,
        console_dir: Optional[Path] = None,
        client_factory: Optional[Callable] = None,
    ) -> None:
        # API에서 전달된 빌드를 실행하기 위한 실행기이며 DB 세션을 사용한다.
        self.session = session
        self.loader = PluginLoader(plugins_dir or PLUGINS_DIR)
        self.artifacts_root = artifacts_root
        self.console_dir = console_dir
        self.client_factory = client_factory
        # 스텝 ID와 함수 이름(rhdaAnalysis) 모두로 찾을 수 있게 인덱스를 만든다.
        self._meta_index: Dict[str, PluginMeta] = {}
        for meta in self.loader.discover():
            self._meta_index[meta.plugin_id] = meta
            if meta.function_name:
                self._meta_index[meta.function_name] = meta

    def get_meta(self, step_id: str) -> PluginMeta:
        meta = self._meta_index.get(step_id)
        if meta is None:
            raise KeyError(f"Step not found: {step_id}")
        return meta

    def run_build(self, build: models.Build) -> Optional[str]:
        """빌드를 실행하고 파이프라인 종료 상태(빌드 스텝은 None)를 반환합니다.

        스텝에서 올라온 예외는 빌드를 FAILED로 기록한 뒤 다시 올립니다.
        """
        meta = self.get_meta(build.step_id)
        config = apply_config_schema(meta.config_schema, build.config or {})
        build.config = config
        self._set_build_running(build)

        console = BuildConsole.open(build.id, self.console_dir)
        try:
            context = StepContext(
                workspace=Path(build.workspace),
                console=console,
                config=config,
                env=dict(build.env or {}),
                uuid=get_or_create_uuid(self.session),
                build_id=build.id,
                artifacts_dir=ensure_artifacts_dir(build.id, self.artifacts_root),
                client_factory=self.client_factory,
            )
            step = self.loader.load_plugin(meta, context)
            exit_status = step.perform()

            for action in step.actions:
                self._store_action(build, action)
            build.exit_status = exit_status
            build.status = "FAILED" if step.failed or exit_status == EXIT_FAILED else "COMPLETED"
            build.end_time = datetime.utcnow()
            build.error_message = None
            self.session.commit()
            logger.info("Build %s finished: %s (%s)", build.id, build.status, exit_status)
            return exit_status
        except Exception as exc:
            # 오류 발생 시 실패 상태로 저장하고 예외를 전파한다.
            console.println(str(exc))
            self.session.rollback()
            build.status = "FAILED"
            build.end_time = datetime.utcnow()
            build.error_message = str(exc)
            self.session.commit()
            logger.warning("Build %s failed: %s", build.id, exc)
            raise
        finally:
            console.close()

    def _set_build_running(self, build: models.Build) -> None:
        # 이전 실행의 결과 액션과 보관된 보고서는 새 실행이 시작될 때 지운다.
        if build.action is not None:
            self.session.delete(build.action)
        archived = ensure_artifacts_dir(build.id, self.artifacts_root) / REPORT_FILE_NAME
        archived.unlink(missing_ok=True)
        build.status = "RUNNING"
        build.exit_status = None
        build.start_time = datetime.utcnow()
        self.session.commit()

    def _store_action(self, build: models.Build, action: ResultAction) -> models.ResultAction:
        record = models.ResultAction(
            build_id=build.id,
            uuid=action.uuid,
            report=action.report,
            report_map=action.report_map,
            url=action.url,
            jobtype=action.jobtype,
        )
        self.session.add(record)
        self.session.commit()
        return record
