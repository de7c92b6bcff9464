"""이 파일은 .py DB 세션 모듈로 엔진/세션 생성과 초기화를 담당합니다."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from rhda.core.config import DATABASE_URL, STORAGE_DIR
from .base import Base


def _ensure_storage_dir() -> None:
    if not STORAGE_DIR.exists():
        STORAGE_DIR.mkdir(parents=True, exist_ok=True)


_connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    _ensure_storage_dir()
    # API 요청 스레드와 빌드 실행 스레드가 같은 연결을 공유할 수 있다.
    _connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db() -> None:
    Base.metadata.create_all(bind=engine)


def get_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    # API 밖(오케스트레이터/스크립트)에서 쓰는 세션 범위이다.
    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
