"""이 파일은 .py 엔트리포인트로 스텝 목록 출력과 대기 빌드 실행을 제공합니다."""

from rhda.core.logging import setup_logging
from rhda.services.orchestrator import Orchestrator


def main() -> None:
    setup_logging()
    orchestrator = Orchestrator()
    orchestrator.run()


if __name__ == "__main__":
    main()
