from health_assistant.config import settings
from health_assistant.database import SessionLocal
from health_assistant.schemas.insights import StoredReport
from health_assistant.schemas.summary import SessionSummary
from health_assistant.services.store import (
    InMemoryStore,
    KeyValueStore,
    SqlReportStore,
    SqlSummaryStore,
)


def _build_stores() -> tuple[KeyValueStore[StoredReport], KeyValueStore[SessionSummary]]:
    if settings.store_backend == "database":
        return SqlReportStore(SessionLocal), SqlSummaryStore(SessionLocal)
    if settings.store_backend != "memory":
        raise RuntimeError(f"Unknown store backend: {settings.store_backend!r}")
    return InMemoryStore(), InMemoryStore()


report_store, summary_store = _build_stores()


def get_report_store() -> KeyValueStore[StoredReport]:
    return report_store


def get_summary_store() -> KeyValueStore[SessionSummary]:
    return summary_store
