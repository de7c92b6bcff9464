"""이 파일은 .py 테스트 모듈로 분석 보고서 집계와 콘솔 출력 형식을 검증합니다."""

from conftest import make_report

from rhda.analysis.dockerfile import ImageRef
from rhda.analysis.formatter import NO_VULNERABILITIES, format_image_report, format_report
from rhda.analysis.report import AnalysisReport


def test_format_report_layout() -> None:
    report = AnalysisReport.from_json(make_report(total=2, critical=1, high=1))
    lines = format_report(report)
    assert lines[:4] == [
        "Dependencies",
        "  Total Scanned     : 3",
        "  Total Direct      : 1",
        "  Total Transitive  : 2",
    ]
    assert "Provider: Rhtpa" in lines
    assert "  Provider Status   : OK" in lines
    assert "  Source: Osv" in lines
    assert "      Total         : 2" in lines
    assert "      Critical      : 1" in lines
    assert "      High          : 1" in lines
    # trusted-content 제공자는 출력하지 않는다.
    assert not any("Trusted-content" in line for line in lines)
    assert lines[-1] == ""


def test_format_report_without_sources() -> None:
    data = make_report()
    data["providers"]["rhtpa"]["sources"] = {}
    lines = format_report(AnalysisReport.from_json(data))
    assert NO_VULNERABILITIES in lines
    assert "  Source: Osv" not in lines


def test_format_report_warns_on_failed_provider() -> None:
    data = make_report(total=1)
    data["providers"]["rhtpa"]["status"] = {"ok": False, "code": 401, "message": "Unauthorized"}
    lines = format_report(AnalysisReport.from_json(data))
    assert "  WARNING: rhtpa: Unauthorized" in lines
    assert "      Total         : 1" in lines


def test_format_image_report_header() -> None:
    lines = format_image_report(ImageRef("nginx:1.25", "linux/amd64"), AnalysisReport.from_json(make_report()))
    assert lines[0] == "Analysis for image: nginx:1.25 (linux/amd64)"
    assert lines[1] == "Dependencies"


def test_total_vulnerabilities_skips_trusted_content() -> None:
    report = AnalysisReport.from_json(make_report(total=4))
    assert report.total_vulnerabilities() == 4
    assert set(report.vulnerability_providers()) == {"rhtpa"}


def test_dependency_issues_are_parsed() -> None:
    data = make_report(total=2)
    data["providers"]["rhtpa"]["sources"]["osv"]["dependencies"] = [
        {"ref": "pkg:npm/a@1", "highestVulnerability": {"id": "CVE-1", "severity": "HIGH", "cvssScore": 8.1}},
        {"ref": "pkg:npm/b@1", "highestVulnerability": {"id": "CVE-2", "severity": "UNKNOWN"}},
        {"ref": "pkg:npm/c@1"},
    ]
    dependencies = AnalysisReport.from_json(data).providers["rhtpa"].sources["osv"].dependencies
    assert dependencies[0].highest_vulnerability.cvss_score == 8.1
    assert dependencies[1].highest_vulnerability.severity == "UNKNOWN"
    assert dependencies[2].highest_vulnerability is None


def test_unknown_fields_are_preserved() -> None:
    data = make_report()
    data["analysisId"] = "abc"
    assert AnalysisReport.from_json(data).to_json()["analysisId"] == "abc"
