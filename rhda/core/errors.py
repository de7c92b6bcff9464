"""이 파일은 .py 공통 예외 모듈로 오류 유형을 표준화합니다."""


class PluginConfigError(ValueError):
    """스텝 설정 검증 실패 시 사용합니다."""


class AdapterError(RuntimeError):
    """외부 어댑터 실행 오류에 사용합니다."""


class ManifestNotFoundError(FileNotFoundError):
    """지정한 매니페스트 파일이 워크스페이스에 없을 때 사용합니다."""


class AnalysisExecutionError(RuntimeError):
    """비동기 분석 실행 중 발생한 오류를 감싸는 예외입니다."""


class PublishError(RuntimeError):
    """HTML 보고서 저장/보관에 실패했을 때 사용합니다."""
