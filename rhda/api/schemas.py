"""이 파일은 .py API 스키마 모듈로 요청/응답 모델을 정의합니다."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildCreate(BaseModel):
    # 빌드 생성 요청 스키마로 실행할 스텝과 스텝 설정을 전달한다.
    step_id: str
    job_name: Optional[str] = None
    workspace: str
    # config는 file/consentTelemetry 설정 객체이다.
    config: Dict[str, Any] = Field(default_factory=dict)
    # env는 빌드 잡 환경 변수이다.
    env: Dict[str, str] = Field(default_factory=dict)
    # run_now가 True면 즉시 실행하고 False면 대기 상태로 만든다.
    run_now: bool = True

    @field_validator("workspace")
    @classmethod
    def validate_workspace(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("workspace is required")
        return value


class BuildResponse(BaseModel):
    id: int
    step_id: str
    job_name: Optional[str] = None
    workspace: str
    config: Dict[str, Any] = Field(default_factory=dict)
    status: str
    exit_status: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    error_message: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BuildStatusResponse(BaseModel):
    # 빌드의 진행률과 종료 상태를 제공한다.
    status: str
    progress: int
    exit_status: Optional[str] = None
    error_message: Optional[str] = None


class StackReportResponse(BaseModel):
    # 호스트 UI가 표시하는 결과 액션(RHDA Stack Report)이다.
    build_id: int
    display_name: str
    url_name: str
    icon_file_name: str
    uuid: str
    jobtype: str
    url: str
    report: Optional[Dict[str, Any]] = None
    report_map: Optional[List[Dict[str, Any]]] = None

    model_config = ConfigDict(from_attributes=True)


class StepResponse(BaseModel):
    id: str
    name: str
    display_name: str
    type: str
    function_name: Optional[str] = None
    description: Optional[str] = None
    config_schema: Optional[Dict[str, Any]] = None


class ValidationKind(str, Enum):
    OK = "ok"
    ERROR = "error"


class FormValidationResponse(BaseModel):
    # 설정 화면의 필드 검증 결과이다.
    kind: ValidationKind
    message: Optional[str] = None
