"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .config import PLUGINS_DIR, REPORT_FILE_NAME
from .console import BuildConsole
from .logging import setup_logging
from .plugin_base import BaseStep
from .plugin_loader import PluginLoader, PluginMeta
from .types import ResultAction, StepContext

__all__ = [
    "BaseStep",
    "BuildConsole",
    "PLUGINS_DIR",
    "PluginLoader",
    "PluginMeta",
    "REPORT_FILE_NAME",
    "ResultAction",
    "StepContext",
    "setup_logging",
]
