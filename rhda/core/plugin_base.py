"""이 파일은 .py 스텝 베이스 모듈로 결과 액션 첨부 공통 로직을 제공합니다."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .types import ResultAction, StepContext


class BaseStep(ABC):
    # plugin.yml의 type 값이 결과 액션의 jobtype 태그가 된다.
    jobtype = "freestyle"

    def __init__(self, context: StepContext, jobtype: Optional[str] = None):
        self.context = context
        if jobtype:
            self.jobtype = jobtype
        self.actions: List[ResultAction] = []
        # 예외를 삼키고 콘솔에만 남긴 경우 빌드를 실패로 기록하기 위한 표시이다.
        self.failed = False

    @abstractmethod
    def perform(self) -> Optional[str]:
        raise NotImplementedError

    def attach_action(self, action: ResultAction) -> ResultAction:
        # 빌드당 하나의 액션만 허용한다.
        if self.actions:
            raise RuntimeError("A result action is already attached to this build")
        self.actions.append(action)
        return action
