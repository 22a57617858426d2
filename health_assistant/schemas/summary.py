from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class TranscriptMessage(BaseModel):
    role: Literal["user", "agent"]
    content: str
    timestamp: str | None = None


class SummaryRequest(BaseModel):
    report_id: str = Field(min_length=1)
    transcript: list[TranscriptMessage]
    language: str | None = None


class TranscriptDigest(BaseModel):
    findings: list[str]
    key_questions_answered: list[str]
    recommendations: list[str]
    follow_up_actions: list[str]


class SessionSummary(TranscriptDigest):
    report_id: str
    generated_at: datetime
