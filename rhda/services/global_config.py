"""이 파일은 .py 전역 설정 모듈로 설치 단위 상관관계 UUID를 관리합니다."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rhda.db import models

logger = logging.getLogger(__name__)

UUID_KEY = "uuid"


def get_or_create_uuid(session: Session) -> str:
    # 한 번 저장된 UUID는 다시 만들지 않는다.
    setting = session.get(models.GlobalSetting, UUID_KEY)
    if setting is not None:
        return setting.value

    session.add(models.GlobalSetting(key=UUID_KEY, value=str(uuid.uuid4())))
    try:
        session.commit()
    except IntegrityError:
        # 동시에 처음 생성한 다른 요청이 이겼으면 그 값을 다시 읽는다.
        session.rollback()
        logger.debug("Correlation UUID was created concurrently; reusing stored value")
        return session.get(models.GlobalSetting, UUID_KEY).value
    return session.get(models.GlobalSetting, UUID_KEY).value
