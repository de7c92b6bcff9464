"""이 파일은 .py DB 패키지 초기화 모듈로 모델 심볼을 노출합니다."""

from .base import Base
from .models import Build, GlobalSetting, ResultAction

__all__ = ["Base", "Build", "GlobalSetting", "ResultAction"]
