"""이 파일은 .py 보고서 포매터 모듈로 분석 결과를 빌드 콘솔 줄로 변환합니다."""

from __future__ import annotations

from typing import List

from rhda.core.console import BuildConsole

from .dockerfile import ImageRef
from .report import AnalysisReport, TRUSTED_CONTENT_PROVIDER

NO_VULNERABILITIES = "No Vulnerabilities found"


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def format_report(report: AnalysisReport) -> List[str]:
    # 의존성 요약 → 제공자 → 소스 → 심각도 순서로 고정된 라벨을 출력한다.
    lines = [
        "Dependencies",
        f"  Total Scanned     : {report.scanned.total}",
        f"  Total Direct      : {report.scanned.direct}",
        f"  Total Transitive  : {report.scanned.transitive}",
    ]
    for name in sorted(report.providers):
        if name.lower() == TRUSTED_CONTENT_PROVIDER:
            continue
        provider = report.providers[name]
        lines.append("")
        lines.append(f"Provider: {_capitalize(name)}")
        lines.append(f"  Provider Status   : {provider.status.message}")
        if provider.status.code != 200:
            # 실패한 제공자도 경고만 남기고 남은 데이터는 그대로 출력한다.
            lines.append(f"  WARNING: {name}: {provider.status.message}")

        sources = provider.sources or {}
        if not sources:
            lines.append(NO_VULNERABILITIES)
            continue
        for source_name in sorted(sources):
            summary = sources[source_name].summary
            lines.extend(
                [
                    f"  Source: {_capitalize(source_name)}",
                    "    Vulnerabilities",
                    f"      Total         : {summary.total}",
                    f"      Direct        : {summary.direct}",
                    f"      Transitive    : {summary.transitive}",
                    f"      Critical      : {summary.critical}",
                    f"      High          : {summary.high}",
                    f"      Medium        : {summary.medium}",
                    f"      Low           : {summary.low}",
                    "",
                ]
            )
    lines.append("")
    return lines


def format_image_report(ref: ImageRef, report: AnalysisReport) -> List[str]:
    return [f"Analysis for image: {ref}", *format_report(report)]


def print_report(report: AnalysisReport, console: BuildConsole) -> None:
    for line in format_report(report):
        console.println(line)


def print_image_report(ref: ImageRef, report: AnalysisReport, console: BuildConsole) -> None:
    for line in format_image_report(ref, report):
        console.println(line)
