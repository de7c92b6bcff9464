"""이 파일은 .py 분석 패키지 초기화 모듈로 추출/호출/포매팅 심볼을 노출합니다."""

from .dockerfile import DockerfileImages, ImageRef, is_dockerfile, parse_dockerfile
from .environment import FORWARDED_ENV_VARS, build_client_env
from .formatter import format_report, print_image_report, print_report
from .invocation import AnalysisOutcome, resolve_manifest, run_analysis
from .report import AnalysisReport

__all__ = [
    "AnalysisOutcome",
    "AnalysisReport",
    "DockerfileImages",
    "FORWARDED_ENV_VARS",
    "ImageRef",
    "build_client_env",
    "format_report",
    "is_dockerfile",
    "parse_dockerfile",
    "print_image_report",
    "print_report",
    "resolve_manifest",
    "run_analysis",
]
