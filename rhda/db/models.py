"""이 파일은 .py DB 모델 정의 모듈로 Build/ResultAction/GlobalSetting을 제공합니다."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from rhda.core.config import ACTION_DISPLAY_NAME, ACTION_ICON_FILE_NAME, ACTION_URL_NAME

from .base import Base


class Build(Base):
    __tablename__ = "builds"

    id = Column(Integer, primary_key=True, index=True)
    step_id = Column(String, nullable=False)
    job_name = Column(String, nullable=True)
    workspace = Column(String, nullable=False)
    # 스텝 설정(file, consentTelemetry)과 빌드 잡 환경 변수이다.
    config = Column(JSON, default={})
    env = Column(JSON, default={})
    status = Column(String, default="PENDING")
    exit_status = Column(String, nullable=True)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    action = relationship("ResultAction", back_populates="build", uselist=False)


class ResultAction(Base):
    __tablename__ = "result_actions"

    id = Column(Integer, primary_key=True)
    # 빌드당 하나의 액션만 허용한다.
    build_id = Column(Integer, ForeignKey("builds.id"), unique=True, nullable=False)
    uuid = Column(String, nullable=False)
    report = Column(JSON, nullable=True)
    report_map = Column(JSON, nullable=True)
    url = Column(String, nullable=False)
    jobtype = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    build = relationship("Build", back_populates="action")

    display_name = ACTION_DISPLAY_NAME
    url_name = ACTION_URL_NAME
    icon_file_name = ACTION_ICON_FILE_NAME


class GlobalSetting(Base):
    __tablename__ = "global_settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
