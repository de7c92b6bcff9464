"""이 파일은 .py 테스트 모듈로 Exhort CLI 어댑터의 명령 구성과 출력 처리를 검증합니다."""

import json

from conftest import make_report

from rhda.adapters.exhort import ExhortClient
from rhda.adapters.sca import ToolResult
from rhda.analysis.dockerfile import ImageRef
from rhda.core.errors import AdapterError


class RecordingRunner:
    def __init__(self, stdout: str = "", exit_code: int = 0, stderr: str = "") -> None:
        self.result = ToolResult(exit_code, stdout, stderr)
        self.commands = []
        self.envs = []

    def run(self, command, cwd=None, env=None):
        self.commands.append(command)
        self.envs.append(env)
        return self.result


def test_stack_analysis_command_and_env() -> None:
    runner = RecordingRunner(stdout=json.dumps(make_report(total=1)))
    client = ExhortClient(env={"RHDA_TOKEN": "u"}, cli_path="exhort", runner=runner)
    report = client.stack_analysis("/ws/package.json")
    assert runner.commands == [["exhort", "stack", "/ws/package.json"]]
    assert runner.envs == [{"RHDA_TOKEN": "u"}]
    assert report.total_vulnerabilities() == 1


def test_stack_analysis_html() -> None:
    runner = RecordingRunner(stdout="<html></html>")
    html = ExhortClient(cli_path="exhort", runner=runner).stack_analysis_html("pom.xml")
    assert runner.commands == [["exhort", "stack", "pom.xml", "--html"]]
    assert html == b"<html></html>"


def test_image_analysis_keys_by_cli_arg_or_name() -> None:
    refs = {ImageRef("nginx:1.25", "linux/amd64"), ImageRef("alpine:3.19")}
    output = {
        "nginx:1.25^^linux/amd64": make_report(total=2),
        "alpine:3.19": make_report(),
    }
    runner = RecordingRunner(stdout=json.dumps(output))
    reports = ExhortClient(cli_path="exhort", runner=runner).image_analysis(refs)
    assert runner.commands == [["exhort", "image", "alpine:3.19", "nginx:1.25^^linux/amd64"]]
    assert reports[ImageRef("nginx:1.25", "linux/amd64")].total_vulnerabilities() == 2
    assert reports[ImageRef("alpine:3.19")].total_vulnerabilities() == 0


def test_image_analysis_keys_by_package_url() -> None:
    refs = {
        ImageRef("nginx:1.25", "linux/arm64"),
        ImageRef("nginx:1.25", "linux/amd64"),
        ImageRef("quay.io/org/app@sha256:abc"),
    }
    output = {
        "pkg:oci/nginx@sha256%3A111?repository_url=docker.io/library/nginx&tag=1.25&os=linux&arch=amd64": make_report(
            total=1
        ),
        "pkg:oci/nginx@sha256%3A222?repository_url=docker.io/library/nginx&tag=1.25&os=linux&arch=arm64": make_report(
            total=2
        ),
        "pkg:oci/app@sha256%3Aabc?repository_url=quay.io/org/app": make_report(total=3),
    }
    runner = RecordingRunner(stdout=json.dumps(output))
    reports = ExhortClient(cli_path="exhort", runner=runner).image_analysis(refs)
    assert reports[ImageRef("nginx:1.25", "linux/amd64")].total_vulnerabilities() == 1
    assert reports[ImageRef("nginx:1.25", "linux/arm64")].total_vulnerabilities() == 2
    assert reports[ImageRef("quay.io/org/app@sha256:abc")].total_vulnerabilities() == 3


def test_image_analysis_single_entry_is_taken_directly() -> None:
    output = {"pkg:oci/redis@sha256%3A999?repository_url=mirror.local/redis&tag=7": make_report(total=4)}
    runner = RecordingRunner(stdout=json.dumps(output))
    reports = ExhortClient(cli_path="exhort", runner=runner).image_analysis({ImageRef("redis:7")})
    assert reports[ImageRef("redis:7")].total_vulnerabilities() == 4


def test_image_analysis_wrong_tag_is_not_matched() -> None:
    refs = {ImageRef("redis:7"), ImageRef("alpine:3.19")}
    output = {
        "pkg:oci/redis@sha256%3A1?repository_url=docker.io/library/redis&tag=6": make_report(),
        "pkg:oci/alpine@sha256%3A2?repository_url=docker.io/library/alpine&tag=3.19": make_report(),
    }
    runner = RecordingRunner(stdout=json.dumps(output))
    try:
        ExhortClient(cli_path="exhort", runner=runner).image_analysis(refs)
    except AdapterError as exc:
        assert "redis:7" in str(exc)
    else:
        raise AssertionError("AdapterError not raised")


def test_image_analysis_missing_image_report() -> None:
    runner = RecordingRunner(stdout=json.dumps({}))
    try:
        ExhortClient(cli_path="exhort", runner=runner).image_analysis({ImageRef("redis:7")})
    except AdapterError as exc:
        assert "redis:7" in str(exc)
    else:
        raise AssertionError("AdapterError not raised")


def test_non_zero_exit_raises() -> None:
    runner = RecordingRunner(exit_code=1, stderr="manifest not supported")
    try:
        ExhortClient(cli_path="exhort", runner=runner).stack_analysis("Cargo.toml")
    except AdapterError as exc:
        assert "manifest not supported" in str(exc)
    else:
        raise AssertionError("AdapterError not raised")


def test_invalid_json_raises() -> None:
    runner = RecordingRunner(stdout="not json")
    try:
        ExhortClient(cli_path="exhort", runner=runner).stack_analysis("pom.xml")
    except AdapterError as exc:
        assert "invalid JSON" in str(exc)
    else:
        raise AssertionError("AdapterError not raised")
