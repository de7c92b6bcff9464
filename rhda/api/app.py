"""이 파일은 .py FastAPI 앱 모듈로 빌드 실행과 결과 액션 조회 엔드포인트를 제공합니다."""

from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.orm import Session

from rhda.core.config import API_PREFIX, PLUGINS_DIR, REPORT_FILE_NAME
from rhda.core.config_validation import apply_config_schema, check_field
from rhda.core.console import console_path
from rhda.core.errors import ManifestNotFoundError, PluginConfigError
from rhda.core.plugin_loader import PluginLoader
from rhda.core.storage import ensure_artifacts_dir
from rhda.db import models
from rhda.db.session import get_session, init_db
from rhda.services.step_executor import StepExecutor

from .schemas import (
    BuildCreate,
    BuildResponse,
    BuildStatusResponse,
    FormValidationResponse,
    StackReportResponse,
    StepResponse,
    ValidationKind,
)

app = FastAPI(title="rhda-ci")


@app.on_event("startup")
def _startup() -> None:
    init_db()


def _get_build(session: Session, build_id: int) -> models.Build:
    build = session.get(models.Build, build_id)
    if build is None:
        raise HTTPException(status_code=404, detail="Build not found")
    return build


def _execute(session: Session, build: models.Build) -> None:
    executor = StepExecutor(session)
    try:
        executor.run_build(build)
    except PluginConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except KeyError as exc:
        detail = exc.args[0] if exc.args else "Invalid step id"
        raise HTTPException(status_code=400, detail=detail) from exc
    except ManifestNotFoundError:
        # 빌드 스텝 실패는 빌드 레코드의 FAILED 상태로 전달한다.
        pass
    session.refresh(build)


@app.get(f"{API_PREFIX}/steps", response_model=List[StepResponse])
def list_steps() -> List[StepResponse]:
    return [
        StepResponse(
            id=meta.plugin_id,
            name=meta.name,
            display_name=meta.display_name,
            type=meta.plugin_type,
            function_name=meta.function_name,
            description=meta.description,
            config_schema=meta.config_schema,
        )
        for meta in PluginLoader(PLUGINS_DIR).discover()
    ]


@app.get(f"{API_PREFIX}/steps/{{step_id}}/check-file", response_model=FormValidationResponse)
def check_file(step_id: str, file: str = Query("")) -> FormValidationResponse:
    try:
        meta = PluginLoader(PLUGINS_DIR).find(step_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Step not found") from exc
    message = check_field(meta.config_schema, "file", file)
    if message:
        return FormValidationResponse(kind=ValidationKind.ERROR, message=message)
    return FormValidationResponse(kind=ValidationKind.OK)


@app.post(f"{API_PREFIX}/builds", response_model=BuildResponse, status_code=201)
def create_build(
    payload: BuildCreate,
    session: Session = Depends(get_session),
) -> BuildResponse:
    # 설정이 잘못되면 빌드를 만들지 않는다.
    try:
        meta = PluginLoader(PLUGINS_DIR).find(payload.step_id)
        config = apply_config_schema(meta.config_schema, payload.config)
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Step not found: {payload.step_id}") from exc
    except PluginConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    build = models.Build(
        step_id=meta.plugin_id,
        job_name=payload.job_name,
        workspace=payload.workspace,
        config=config,
        env=payload.env,
        status="PENDING",
    )
    session.add(build)
    session.commit()
    session.refresh(build)

    if payload.run_now:
        _execute(session, build)
    return BuildResponse.model_validate(build)


@app.get(f"{API_PREFIX}/builds", response_model=List[BuildResponse])
def list_builds(
    status: str = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    session: Session = Depends(get_session),
) -> List[BuildResponse]:
    query = session.query(models.Build)
    if status:
        query = query.filter(models.Build.status == status)
    records = query.order_by(models.Build.id.desc()).offset(offset).limit(limit).all()
    return [BuildResponse.model_validate(record) for record in records]


@app.get(f"{API_PREFIX}/builds/{{build_id}}", response_model=BuildResponse)
def get_build(build_id: int, session: Session = Depends(get_session)) -> BuildResponse:
    return BuildResponse.model_validate(_get_build(session, build_id))


@app.post(f"{API_PREFIX}/builds/{{build_id}}/run", response_model=BuildResponse)
def run_build(build_id: int, session: Session = Depends(get_session)) -> BuildResponse:
    build = _get_build(session, build_id)
    if build.status == "RUNNING":
        raise HTTPException(status_code=409, detail="Build already running")
    _execute(session, build)
    return BuildResponse.model_validate(build)


@app.get(f"{API_PREFIX}/builds/{{build_id}}/status", response_model=BuildStatusResponse)
def get_build_status(build_id: int, session: Session = Depends(get_session)) -> BuildStatusResponse:
    build = _get_build(session, build_id)
    progress_map = {
        "PENDING": 0,
        "RUNNING": 50,
        "COMPLETED": 100,
        "FAILED": 100,
    }
    return BuildStatusResponse(
        status=build.status,
        progress=progress_map.get(build.status, 0),
        exit_status=build.exit_status,
        error_message=build.error_message,
    )


@app.get(f"{API_PREFIX}/builds/{{build_id}}/console", response_class=PlainTextResponse)
def get_build_console(build_id: int, session: Session = Depends(get_session)) -> str:
    _get_build(session, build_id)
    path = console_path(build_id)
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


@app.get(f"{API_PREFIX}/builds/{{build_id}}/stack_report", response_model=StackReportResponse)
def get_stack_report(build_id: int, session: Session = Depends(get_session)) -> StackReportResponse:
    build = _get_build(session, build_id)
    action = build.action
    if action is None:
        raise HTTPException(status_code=404, detail="No RHDA Stack Report for this build")
    return StackReportResponse(
        build_id=build.id,
        display_name=action.display_name,
        url_name=action.url_name,
        icon_file_name=action.icon_file_name,
        uuid=action.uuid,
        jobtype=action.jobtype,
        url=action.url,
        report=action.report,
        report_map=action.report_map,
    )


@app.get(f"{API_PREFIX}/builds/{{build_id}}/artifact")
def download_artifact(build_id: int, session: Session = Depends(get_session)) -> FileResponse:
    _get_build(session, build_id)
    file_path = ensure_artifacts_dir(build_id) / REPORT_FILE_NAME
    if not file_path.exists():
        raise HTTPException(status_code=404, detail="Report artifact not found")
    return FileResponse(path=str(file_path), filename=REPORT_FILE_NAME, media_type="text/html")
