"""이 파일은 .py Exhort 어댑터로 외부 분석 클라이언트 CLI 호출을 래핑합니다.

의존성 해석과 취약점 조회는 모두 Exhort 클라이언트가 수행하며, 이 어댑터는 명령을
구성하고 출력(JSON/HTML)을 돌려받는 역할만 합니다.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, unquote, urlsplit

from rhda.analysis.dockerfile import ImageRef
from rhda.analysis.report import AnalysisReport
from rhda.core.config import ANALYSIS_TIMEOUT, RHDA_CLI_PATH
from rhda.core.errors import AdapterError

from .sca import ScaRunner, ToolResult

logger = logging.getLogger(__name__)


class ExhortClient:
    def __init__(
        self,
        env: Optional[Mapping[str, str]] = None,
        cli_path: Optional[str] = None,
        runner: Optional[ScaRunner] = None,
    ) -> None:
        self.env = dict(env) if env is not None else None
        self.cli_path = cli_path or RHDA_CLI_PATH
        self.runner = runner or ScaRunner(timeout=ANALYSIS_TIMEOUT)

    def stack_analysis(self, manifest: str) -> AnalysisReport:
        output = self._run(["stack", manifest])
        return AnalysisReport.from_json(_load_json(output, "stack"))

    def stack_analysis_html(self, manifest: str) -> bytes:
        return self._run(["stack", manifest, "--html"]).encode("utf-8")

    def image_analysis(self, refs: Iterable[ImageRef]) -> Dict[ImageRef, AnalysisReport]:
        ordered = _ordered(refs)
        data = _load_json(self._run(["image", *(ref.to_cli_arg() for ref in ordered)]), "image")
        if not isinstance(data, dict):
            raise AdapterError("Image analysis output must be an object keyed by image")

        reports: Dict[ImageRef, AnalysisReport] = {}
        for ref in ordered:
            payload = _find_image_report(ref, data)
            if payload is None and len(ordered) == 1 and len(data) == 1:
                payload = next(iter(data.values()))
            if payload is None:
                raise AdapterError(f"No analysis report returned for image {ref.to_cli_arg()}")
            reports[ref] = AnalysisReport.from_json(payload)
        return reports

    def image_analysis_html(self, refs: Iterable[ImageRef]) -> bytes:
        args = [ref.to_cli_arg() for ref in _ordered(refs)]
        return self._run(["image", *args, "--html"]).encode("utf-8")

    def _run(self, args: List[str]) -> str:
        command = [self.cli_path, *args]
        logger.debug("Running analysis client: %s", " ".join(command))
        result: ToolResult = self.runner.run(command, env=self.env)
        if result.exit_code != 0:
            raise AdapterError(
                f"Analysis client exited with {result.exit_code}: {result.stderr.strip() or result.stdout.strip()}"
            )
        return result.stdout


def _ordered(refs: Iterable[ImageRef]) -> List[ImageRef]:
    # 집합으로 받은 이미지도 항상 같은 순서로 명령을 구성한다.
    return sorted(set(refs), key=lambda ref: (ref.name, ref.platform or ""))


def _load_json(output: str, command: str) -> Any:
    try:
        return json.loads(output)
    except json.JSONDecodeError as exc:
        raise AdapterError(f"Analysis client returned invalid JSON for {command}") from exc


OCI_PURL_PREFIX = "pkg:oci/"
DEFAULT_TAG = "latest"
_DOCKER_HUB_PREFIXES = ("docker.io/", "index.docker.io/", "registry-1.docker.io/")


def _find_image_report(ref: ImageRef, data: Dict[str, Any]) -> Optional[Any]:
    # 출력 키는 이미지 purl(pkg:oci/...)이며 CLI 인자 형식이나 이미지 이름도 받는다.
    for key, payload in data.items():
        if key.startswith(OCI_PURL_PREFIX):
            if _purl_matches(ref, key):
                return payload
            continue
        candidate = ImageRef.from_cli_arg(key)
        if candidate == ref or (candidate.platform is None and candidate.name == ref.name):
            return payload
    return None


def _purl_matches(ref: ImageRef, purl: str) -> bool:
    """pkg:oci purl이 이미지 참조와 같은 이미지를 가리키는지 판단합니다.

    저장소는 repository_url 한정자(없으면 purl 이름)로 비교하고 Docker Hub 기본
    접두사는 무시합니다. 참조에 digest가 있으면 purl 버전과, 아니면 tag 한정자와
    비교하며, 참조에 플랫폼이 있고 purl에 os/arch가 있으면 플랫폼도 같아야 합니다.
    """
    parts = urlsplit(purl)
    purl_name, _, version = unquote(parts.path[len("oci/"):]).partition("@")
    qualifiers = dict(parse_qsl(parts.query))
    repository, tag, digest = _split_image_name(ref.name)

    repository_url = qualifiers.get("repository_url") or purl_name
    if _normalize_repository(repository_url) != _normalize_repository(repository):
        return False
    if digest:
        if version != digest:
            return False
    elif (tag or DEFAULT_TAG) != qualifiers.get("tag", DEFAULT_TAG):
        return False
    platform = _purl_platform(qualifiers)
    return ref.platform is None or platform is None or platform == ref.platform


def _split_image_name(name: str) -> Tuple[str, Optional[str], Optional[str]]:
    # registry:port/repo:tag@digest 형식을 (저장소, tag, digest)로 나눈다.
    digest = None
    if "@" in name:
        name, digest = name.split("@", 1)
    tag = None
    colon = name.rfind(":")
    if colon > name.rfind("/"):
        name, tag = name[:colon], name[colon + 1:]
    return name, tag, digest


def _normalize_repository(value: str) -> str:
    value = value.lower()
    for prefix in _DOCKER_HUB_PREFIXES:
        if value.startswith(prefix):
            value = value[len(prefix):]
            break
    if value.startswith("library/"):
        value = value[len("library/"):]
    return value


def _purl_platform(qualifiers: Dict[str, str]) -> Optional[str]:
    os_name, arch = qualifiers.get("os"), qualifiers.get("arch")
    if not os_name or not arch:
        return None
    return "/".join(part for part in (os_name, arch, qualifiers.get("variant")) if part)
