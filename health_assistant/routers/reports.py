import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError

from health_assistant.routers.deps import get_report_store
from health_assistant.schemas.insights import StoredReport
from health_assistant.schemas.report import HealthReport
from health_assistant.services.agent_context import AGENT_PROMPT, format_report_for_agent
from health_assistant.services.insights import generate_insights
from health_assistant.services.store import KeyValueStore, generate_report_id
from health_assistant.services.validator import ReportValidationError, validate_report

router = APIRouter(prefix="/api/reports", tags=["reports"])
logger = logging.getLogger(__name__)


def _load_report(store: KeyValueStore[StoredReport], report_id: str) -> StoredReport:
    stored = store.get(report_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return stored


def _pydantic_errors(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]


def _model_input(payload: dict, report_id: str) -> dict:
    data = {**payload, "report_id": report_id, "created_at": datetime.now(timezone.utc).isoformat()}
    # Non-object metadata or lab summary blocks carry nothing usable and are ignored.
    for key in ("metadata", "summary"):
        if not isinstance(data.get(key), dict):
            data.pop(key, None)
    return data


@router.post("/upload", status_code=201)
def upload_report(
    payload: Any = Body(...),
    store: KeyValueStore[StoredReport] = Depends(get_report_store),
):
    validation = validate_report(payload)
    if not validation.valid:
        raise ReportValidationError(validation.errors, validation.warnings)

    report_id = generate_report_id()
    try:
        report = HealthReport.model_validate(_model_input(payload, report_id))
    except ValidationError as exc:
        raise ReportValidationError(_pydantic_errors(exc), validation.warnings) from exc

    insights = generate_insights(report)
    store.put(report_id, StoredReport(report=report, insights=insights))
    logger.info("Accepted report %s with %d lab values", report_id, len(insights.flagged_values))

    return {
        "statusCode": 201,
        "message": "Report processed successfully",
        "data": {
            "report_id": report_id,
            "patient_name": report.patient.name,
            "test_date": insights.test_date,
            "insights": {
                "headline_insights": insights.headline_insights,
                "risk_tags": insights.risk_tags,
                "flagged_count": len(insights.flagged_values),
                "out_of_range_count": sum(1 for item in insights.flagged_values if item.is_out_of_range),
            },
            "warnings": validation.warnings,
        },
    }


@router.get("/{report_id}")
def get_report(report_id: str, store: KeyValueStore[StoredReport] = Depends(get_report_store)):
    stored = _load_report(store, report_id)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": stored.model_dump(mode="json", by_alias=True),
    }


@router.get("/{report_id}/context")
def get_report_context(report_id: str, store: KeyValueStore[StoredReport] = Depends(get_report_store)):
    stored = _load_report(store, report_id)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "report_id": report_id,
            "context": format_report_for_agent(stored.report),
            "prompt": AGENT_PROMPT,
        },
    }
