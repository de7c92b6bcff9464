"""이 파일은 .py 분석 보고서 모델 모듈로 Exhort JSON 응답 구조를 정의합니다."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

TRUSTED_CONTENT_PROVIDER = "trusted-content"


class _ReportModel(BaseModel):
    # 분석 서비스가 필드를 추가해도 그대로 보존한다.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Scanned(_ReportModel):
    total: int = 0
    direct: int = 0
    transitive: int = 0


class ProviderStatus(_ReportModel):
    ok: bool = True
    name: Optional[str] = None
    code: int = 200
    message: Optional[str] = None
    warnings: Dict[str, Any] = Field(default_factory=dict)


class SourceSummary(_ReportModel):
    direct: int = 0
    transitive: int = 0
    total: int = 0
    dependencies: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    remediations: int = 0
    recommendations: int = 0


class Issue(_ReportModel):
    id: Optional[str] = None
    title: Optional[str] = None
    severity: Optional[str] = None
    cvss_score: Optional[float] = Field(default=None, alias="cvssScore")
    cves: List[str] = Field(default_factory=list)


class DependencyReport(_ReportModel):
    ref: Optional[str] = None
    issues: List[Issue] = Field(default_factory=list)
    transitive: List["DependencyReport"] = Field(default_factory=list)
    highest_vulnerability: Optional[Issue] = Field(default=None, alias="highestVulnerability")


DependencyReport.model_rebuild()


class Source(_ReportModel):
    summary: SourceSummary = Field(default_factory=SourceSummary)
    dependencies: List[DependencyReport] = Field(default_factory=list)


class ProviderReport(_ReportModel):
    status: ProviderStatus = Field(default_factory=ProviderStatus)
    sources: Optional[Dict[str, Source]] = None


class AnalysisReport(_ReportModel):
    """분석 서비스가 돌려주는 매니페스트(또는 이미지) 단위 보고서입니다.

    플러그인은 이 구조를 읽기만 하며, 콘솔 출력과 종료 상태 판단에 필요한 집계만
    헬퍼 메서드로 제공합니다.
    """

    scanned: Scanned = Field(default_factory=Scanned)
    providers: Dict[str, ProviderReport] = Field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AnalysisReport":
        return cls.model_validate(data)

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def vulnerability_providers(self) -> Dict[str, ProviderReport]:
        # trusted-content 제공자는 취약점 집계 대상이 아니다.
        return {
            name: provider
            for name, provider in self.providers.items()
            if name.lower() != TRUSTED_CONTENT_PROVIDER
        }

    def total_vulnerabilities(self) -> int:
        total = 0
        for provider in self.vulnerability_providers().values():
            for source in (provider.sources or {}).values():
                total += source.summary.total
        return total
