"""이 파일은 .py 어댑터 패키지 초기화 모듈로 외부 분석 클라이언트를 노출합니다."""

from .exhort import ExhortClient
from .sca import ScaRunner, ToolResult

__all__ = ["ExhortClient", "ScaRunner", "ToolResult"]
