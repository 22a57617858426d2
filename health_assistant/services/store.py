"""Key-value stores for uploaded reports and session summaries.

The insight pipeline never touches these; routers receive a store through a
FastAPI dependency so the backing technology can be swapped freely. Ids are
generated fresh per upload, so each report key is written exactly once.
"""

import logging
import secrets
import string
import time
from typing import Generic, Protocol, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from health_assistant.models.report import ReportRecord, SessionSummaryRecord
from health_assistant.schemas.insights import StoredReport
from health_assistant.schemas.summary import SessionSummary

logger = logging.getLogger(__name__)

V = TypeVar("V")

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_report_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"report_{int(time.time() * 1000)}_{suffix}"


class KeyValueStore(Protocol[V]):
    def put(self, key: str, value: V) -> None: ...

    def get(self, key: str) -> V | None: ...


class InMemoryStore(Generic[V]):
    def __init__(self) -> None:
        self._items: dict[str, V] = {}

    def put(self, key: str, value: V) -> None:
        self._items[key] = value

    def get(self, key: str) -> V | None:
        return self._items.get(key)


class SqlReportStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def put(self, key: str, value: StoredReport) -> None:
        with self._session_factory() as db:
            db.merge(
                ReportRecord(
                    report_id=key,
                    patient_name=value.report.patient.name,
                    payload=value.model_dump_json(by_alias=True),
                )
            )
            db.commit()
        logger.debug("Stored report %s", key)

    def get(self, key: str) -> StoredReport | None:
        with self._session_factory() as db:
            record = db.get(ReportRecord, key)
            if record is None:
                return None
            return StoredReport.model_validate_json(record.payload)


class SqlSummaryStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def put(self, key: str, value: SessionSummary) -> None:
        with self._session_factory() as db:
            db.merge(
                SessionSummaryRecord(
                    report_id=key,
                    payload=value.model_dump_json(),
                    generated_at=value.generated_at,
                )
            )
            db.commit()
        logger.debug("Stored session summary for %s", key)

    def get(self, key: str) -> SessionSummary | None:
        with self._session_factory() as db:
            record = db.get(SessionSummaryRecord, key)
            if record is None:
                return None
            return SessionSummary.model_validate_json(record.payload)
