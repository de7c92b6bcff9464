"""이 파일은 .py Dockerfile 모듈로 FROM 명령의 베이스 이미지 참조를 추출합니다.

정식 Dockerfile 문법 파서가 아니라 줄 단위 정규식 휴리스틱입니다. 줄 맨 앞(공백 제외)에
오는 ``FROM`` 만 인식하고, ``--platform=`` 플래그와 ``AS <stage>`` 별칭을 걷어낸 나머지를
이미지 이름으로 봅니다. 문법 자체의 유효성은 검사하지 않습니다.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Set, Union

logger = logging.getLogger(__name__)

FROM_PATTERN = re.compile(r"^\s*FROM\s+(.*)")
PLATFORM_PATTERN = re.compile(r"--platform=([^\s]+)")
AS_PATTERN = re.compile(r"\s+AS\s+\S+", re.IGNORECASE)
SCRATCH_IMAGE = "scratch"
PLATFORM_SEPARATOR = "^^"

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ImageRef:
    # 이미지 이름과 선택적 플랫폼 쌍으로 동일성을 판단한다.
    name: str
    platform: Optional[str] = None

    def to_cli_arg(self) -> str:
        # 분석 CLI는 image^^platform 형식으로 플랫폼을 전달받는다.
        if self.platform:
            return f"{self.name}{PLATFORM_SEPARATOR}{self.platform}"
        return self.name

    @classmethod
    def from_cli_arg(cls, value: str) -> "ImageRef":
        name, _, platform = value.partition(PLATFORM_SEPARATOR)
        return cls(name, platform or None)

    def __str__(self) -> str:
        if self.platform:
            return f"{self.name} ({self.platform})"
        return self.name


def parse_from_line(line: str) -> Optional[ImageRef]:
    # FROM 줄 하나에서 이미지 참조를 만든다. 대상이 아니면 None이다.
    match = FROM_PATTERN.search(line.strip())
    if not match:
        return None
    remainder = match.group(1)
    platform_match = PLATFORM_PATTERN.search(remainder)
    platform = platform_match.group(1) if platform_match else None
    image = PLATFORM_PATTERN.sub("", remainder)
    image = AS_PATTERN.sub("", image).strip()
    if not image or image.lower() == SCRATCH_IMAGE:
        return None
    return ImageRef(image, platform)


def iter_image_refs(path: PathLike) -> Iterator[ImageRef]:
    # 파일을 줄 단위로 읽으며 중복 없이 이미지 참조를 내보낸다.
    seen: Set[ImageRef] = set()
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            ref = parse_from_line(line)
            if ref is None or ref in seen:
                continue
            seen.add(ref)
            yield ref


def parse_dockerfile(path: PathLike) -> Set[ImageRef]:
    try:
        return set(iter_image_refs(path))
    except OSError as exc:
        # 읽기 실패는 호출자에게 빈 집합으로 전달하고 로그만 남긴다.
        logger.warning("Failed to read Dockerfile %s: %s", path, exc)
        return set()


class DockerfileImages:
    """Dockerfile 베이스 이미지의 지연 평가 컬렉션입니다.

    순회할 때마다 파일을 다시 읽으므로 여러 번 순회할 수 있고, 읽기 오류는 빈 결과로
    처리됩니다.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    def __iter__(self) -> Iterator[ImageRef]:
        return iter(parse_dockerfile(self.path))

    def __len__(self) -> int:
        return len(parse_dockerfile(self.path))

    def __bool__(self) -> bool:
        return len(self) > 0


def is_dockerfile(path: PathLike) -> bool:
    # 첫 번째 유효 줄(공백/주석 제외)이 FROM으로 시작하는지만 본다.
    # 매니페스트 인코딩은 제각각이므로 디코딩 오류는 대체 문자로 바꿔 읽는다.
    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if line and not line.startswith("#"):
                return line.startswith("FROM")
    return False
