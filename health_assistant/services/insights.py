"""Insight generation for uploaded reports.

Turns a validated HealthReport into headline findings, coarse risk tags and a
plain-text summary. The output is advisory only and depends on nothing but the
report itself (plus today's date when the report carries no date at all).
"""

from datetime import date, datetime, timezone

from health_assistant.schemas.insights import FlaggedLabValue, ReportInsights
from health_assistant.schemas.report import HealthReport
from health_assistant.services.flagger import flag_lab_values
from health_assistant.services.normalizer import normalize_lab_name
from health_assistant.services.reconciler import to_lab_values

ALL_NORMAL_INSIGHT = "All measured values are within normal ranges."

# Matched as substrings of the normalized lab name.
RISK_KEYWORDS = {
    "blood_health": ["hemoglobin", "hematocrit", "rbc", "wbc", "platelets"],
    "metabolic": ["glucose", "glucose_fasting"],
    "kidney_function": ["creatinine", "bun"],
    "liver_function": ["ast", "alt", "alkaline_phosphatase", "total_bilirubin"],
    "cardiovascular": ["ldl", "hdl", "triglycerides", "total_cholesterol"],
    "electrolytes": ["sodium", "potassium", "calcium", "magnesium"],
    "thyroid": ["tsh"],
}


def generate_headline_insights(flagged_values: list[FlaggedLabValue]) -> list[str]:
    insights = []
    critical = [item.name for item in flagged_values if item.severity == "critical"]
    warning = [item.name for item in flagged_values if item.severity == "warning"]

    if critical:
        insights.append(
            f"Critical findings detected: {', '.join(critical)}. "
            "Please consult your healthcare provider immediately."
        )
    if warning:
        insights.append(f"Several values are outside normal range: {', '.join(warning)}. Discuss with your doctor.")
    if not flagged_values:
        insights.append(ALL_NORMAL_INSIGHT)
    return insights


def generate_risk_tags(flagged_values: list[FlaggedLabValue]) -> list[str]:
    tags: dict[str, None] = {}
    for item in flagged_values:
        if item.severity == "normal":
            continue
        normalized = normalize_lab_name(item.name)
        for tag, keywords in RISK_KEYWORDS.items():
            if any(keyword in normalized for keyword in keywords):
                tags.setdefault(tag, None)
    return list(tags)


def _date_part(timestamp: str | None) -> str:
    if not timestamp:
        return ""
    return timestamp.split("T")[0]


def resolve_test_date(report: HealthReport, today: date | None = None) -> str:
    metadata = report.metadata
    resolved = (
        report.test_date
        or _date_part(metadata.reported_on if metadata else None)
        or _date_part(metadata.sample_collected if metadata else None)
    )
    if resolved:
        return resolved
    return (today or datetime.now(timezone.utc).date()).isoformat()


def generate_summary_text(report: HealthReport, test_date: str, insights: list[str]) -> str:
    patient = report.patient
    lines = [
        f"Health Report Summary for {patient.name}",
        f"Test Date: {test_date}",
        f"Age: {patient.age}, Gender: {patient.gender}",
        "",
        "Key Findings:",
        *insights,
    ]
    if report.notes:
        lines.extend(["", "Additional Notes:", report.notes])
    return "\n".join(lines)


def generate_insights(report: HealthReport, today: date | None = None) -> ReportInsights:
    flagged_values = flag_lab_values(to_lab_values(report))
    headline_insights = generate_headline_insights(flagged_values)
    test_date = resolve_test_date(report, today=today)

    return ReportInsights(
        report_id=report.report_id or "",
        patient_name=report.patient.name,
        test_date=test_date,
        flagged_values=flagged_values,
        headline_insights=headline_insights,
        risk_tags=generate_risk_tags(flagged_values),
        summary_text=generate_summary_text(report, test_date, headline_insights),
    )
