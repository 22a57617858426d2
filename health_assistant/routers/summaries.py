import logging

from fastapi import APIRouter, Depends, HTTPException

from health_assistant.routers.deps import get_summary_store
from health_assistant.schemas.summary import SessionSummary, SummaryRequest
from health_assistant.services.store import KeyValueStore
from health_assistant.services.transcript import build_session_summary

router = APIRouter(prefix="/api/summaries", tags=["summaries"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
def create_summary(payload: SummaryRequest, store: KeyValueStore[SessionSummary] = Depends(get_summary_store)):
    summary = build_session_summary(payload.report_id, payload.transcript)
    store.put(payload.report_id, summary)
    logger.info(
        "Generated session summary for %s from %d messages (language=%s)",
        payload.report_id,
        len(payload.transcript),
        payload.language or "default",
    )
    return {
        "statusCode": 201,
        "message": "Summary generated",
        "data": summary.model_dump(mode="json"),
    }


@router.get("/{report_id}")
def get_summary(report_id: str, store: KeyValueStore[SessionSummary] = Depends(get_summary_store)):
    summary = store.get(report_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Summary not found")
    return {
        "statusCode": 200,
        "message": "Success",
        "data": summary.model_dump(mode="json"),
    }
