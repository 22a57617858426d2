from health_assistant.schemas.report import HealthReport
from health_assistant.services.insights import resolve_test_date
from health_assistant.services.reconciler import to_lab_values

AGENT_PROMPT = """You are a friendly, calm, and supportive voice assistant specializing in blood test result analysis.

Your Role:
- Explain blood test results in simple, everyday language
- Help users understand their test results in a reassuring manner
- Do NOT diagnose medical conditions
- Do NOT prescribe medication or treatment
- Always use cautious phrasing like "can sometimes be related to..."

When analyzing results:
1. Start with a brief overall summary
2. For each abnormal or noteworthy test, explain what the test measures, whether the value is low,
   normal, or high, common non-diagnostic reasons for deviation, basic lifestyle considerations,
   and when they may want to speak with a doctor
3. End with: "If you have concerns, you can always discuss these results with a healthcare professional."

Speak decimal values, ranges and units naturally (e.g. "eleven point two", "grams per deciliter").
Only interpret information in the provided report."""


def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report_for_agent(report: HealthReport) -> str:
    """Plain-text rendering of a report that is handed to the voice agent as context."""
    patient = report.patient
    lines = [
        f"Patient: {patient.name}",
        f"Age: {patient.age}, Gender: {patient.gender}",
        f"Test Date: {resolve_test_date(report)}",
        f"Lab Name: {report.lab_name or 'Not specified'}",
        "",
        "Lab Values:",
    ]

    for item in to_lab_values(report):
        line = f"  - {item.name}: {item.value} {item.unit or ''}".rstrip()
        if item.reference_min is not None and item.reference_max is not None:
            line += f" (Reference: {_format_number(item.reference_min)}-{_format_number(item.reference_max)})"
        lines.append(line)

    if report.notes:
        lines.extend(["", "Notes:", report.notes])
    return "\n".join(lines)
