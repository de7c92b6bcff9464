"""이 파일은 .py 테스트 모듈로 HTML 아티팩트 게시와 결과 액션 생성을 검증합니다."""

import io

from conftest import make_report

from rhda.analysis.dockerfile import ImageRef
from rhda.analysis.invocation import AnalysisOutcome
from rhda.analysis.report import AnalysisReport
from rhda.core.config import REPORT_FILE_NAME
from rhda.core.console import BuildConsole
from rhda.core.errors import PublishError
from rhda.core.types import StepContext
from rhda.services import publisher


def _context(workspace, artifacts_dir) -> StepContext:
    return StepContext(
        workspace=workspace,
        console=BuildConsole(io.StringIO()),
        config={"file": "package.json"},
        uuid="uuid-1",
        build_id=7,
        artifacts_dir=artifacts_dir,
    )


def test_publish_stack_report(workspace, tmp_path) -> None:
    artifacts_dir = tmp_path / "artifacts"
    context = _context(workspace, artifacts_dir)
    outcome = AnalysisOutcome(html=b"<html/>", report=AnalysisReport.from_json(make_report(total=1)))

    action = publisher.publish(context, outcome, "pipeline")

    assert (workspace / REPORT_FILE_NAME).read_bytes() == b"<html/>"
    assert (artifacts_dir / REPORT_FILE_NAME).read_bytes() == b"<html/>"
    assert action.uuid == "uuid-1"
    assert action.jobtype == "pipeline"
    assert action.report["scanned"]["total"] == 3
    assert action.report_map is None
    assert action.display_name == "RHDA Stack Report"
    assert action.url_name == "stack_report"
    assert "Build Artifacts" in context.console.stream.getvalue()


def test_publish_image_report_map(workspace, tmp_path) -> None:
    context = _context(workspace, tmp_path / "artifacts")
    outcome = AnalysisOutcome(
        html=b"<html/>",
        report_map={
            ImageRef("nginx:1.25", "linux/amd64"): AnalysisReport.from_json(make_report(total=2)),
            ImageRef("alpine:3.19"): AnalysisReport.from_json(make_report()),
        },
    )
    action = publisher.publish(context, outcome, "freestyle")
    assert action.report is None
    assert [(item["image"], item["platform"]) for item in action.report_map] == [
        ("alpine:3.19", None),
        ("nginx:1.25", "linux/amd64"),
    ]


def test_failed_archive_publishes_nothing(workspace, tmp_path, monkeypatch) -> None:
    context = _context(workspace, tmp_path / "artifacts")
    outcome = AnalysisOutcome(html=b"<html/>", report=AnalysisReport.from_json(make_report()))

    def fail(self, workspace, artifacts_dir):
        raise PublishError("disk full")

    monkeypatch.setattr(publisher.ArtifactArchiver, "perform", fail)
    try:
        publisher.publish(context, outcome, "pipeline")
    except PublishError as exc:
        assert "disk full" in str(exc)
    else:
        raise AssertionError("PublishError not raised")
    assert not (workspace / REPORT_FILE_NAME).exists()
    assert "Build Artifacts" not in context.console.stream.getvalue()


def test_failed_write_raises(tmp_path) -> None:
    missing_workspace = tmp_path / "missing"
    try:
        publisher.save_html_report(b"<html/>", missing_workspace)
    except PublishError:
        pass
    else:
        raise AssertionError("PublishError not raised")
