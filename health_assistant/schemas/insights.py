from typing import Literal

from pydantic import BaseModel, Field

from health_assistant.schemas.report import HealthReport, LabValue

Severity = Literal["normal", "warning", "critical"]


class FlaggedLabValue(LabValue):
    is_out_of_range: bool = Field(alias="isOutOfRange")
    severity: Severity


class ReportInsights(BaseModel):
    report_id: str
    patient_name: str
    test_date: str
    flagged_values: list[FlaggedLabValue]
    headline_insights: list[str]
    risk_tags: list[str]
    summary_text: str


class StoredReport(BaseModel):
    """Value kept in the report store under the report id."""
    report: HealthReport
    insights: ReportInsights
