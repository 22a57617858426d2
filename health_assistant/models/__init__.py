from health_assistant.models.report import ReportRecord, SessionSummaryRecord

__all__ = [
    "ReportRecord",
    "SessionSummaryRecord",
]
