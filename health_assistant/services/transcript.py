"""Keyword heuristics that turn a voice session transcript into a session summary."""

import re
from datetime import datetime, timezone

from health_assistant.schemas.summary import SessionSummary, TranscriptDigest, TranscriptMessage

MAX_FINDINGS = 5
MAX_QUESTIONS = 3
FINDING_MIN_LENGTH = 50
SENTENCES_PER_MESSAGE = 2

QUESTION_MARKERS = ("?", "what", "why")
SENTENCE_SPLIT = re.compile(r"[.!?]+")

ELEVATED_KEYWORDS = ("high", "elevated", "above")
LOW_KEYWORDS = ("low", "below", "deficient")
NORMAL_KEYWORDS = ("normal", "within range")

ELEVATED_RECOMMENDATION = "Monitor the elevated values closely and schedule a follow-up with your doctor."
LOW_RECOMMENDATION = (
    "Consider dietary adjustments or supplementation as recommended by your healthcare provider."
)
NORMAL_RECOMMENDATION = "Continue current health practices and maintain regular check-ups."
GENERIC_RECOMMENDATION = "Consult with your healthcare provider for personalized recommendations."

REVIEW_TRANSCRIPT_ACTION = "Review the conversation transcript for detailed explanations of your health metrics."
STANDARD_FOLLOW_UP_ACTIONS = (
    "Schedule a follow-up appointment with your healthcare provider to discuss results.",
    "Keep a record of this report for future reference and comparison.",
    "Share this summary with your healthcare provider if needed.",
)


def extract_key_points(transcript: list[TranscriptMessage | dict]) -> tuple[list[str], list[str]]:
    """Return (findings, questions) without any capping applied."""
    findings: list[str] = []
    questions: list[str] = []

    for item in transcript:
        message = TranscriptMessage.model_validate(item)
        if message.role == "user":
            content = message.content.lower()
            if any(marker in content for marker in QUESTION_MARKERS):
                questions.append(message.content)
        elif message.role == "agent" and len(message.content) > FINDING_MIN_LENGTH:
            sentences = [part.strip() for part in SENTENCE_SPLIT.split(message.content) if part.strip()]
            findings.extend(sentences[:SENTENCES_PER_MESSAGE])

    return findings, questions


def generate_recommendations(findings: list[str]) -> list[str]:
    text = " ".join(findings).lower()
    recommendations = []
    if any(keyword in text for keyword in ELEVATED_KEYWORDS):
        recommendations.append(ELEVATED_RECOMMENDATION)
    if any(keyword in text for keyword in LOW_KEYWORDS):
        recommendations.append(LOW_RECOMMENDATION)
    if any(keyword in text for keyword in NORMAL_KEYWORDS):
        recommendations.append(NORMAL_RECOMMENDATION)
    return recommendations or [GENERIC_RECOMMENDATION]


def generate_follow_up_actions(questions: list[str]) -> list[str]:
    actions = [REVIEW_TRANSCRIPT_ACTION] if questions else []
    actions.extend(STANDARD_FOLLOW_UP_ACTIONS)
    return actions


def summarize_transcript(transcript: list[TranscriptMessage | dict]) -> TranscriptDigest:
    findings, questions = extract_key_points(transcript)
    return TranscriptDigest(
        findings=findings[:MAX_FINDINGS],
        key_questions_answered=questions[:MAX_QUESTIONS],
        recommendations=generate_recommendations(findings),
        follow_up_actions=generate_follow_up_actions(questions),
    )


def build_session_summary(
    report_id: str,
    transcript: list[TranscriptMessage | dict],
    now: datetime | None = None,
) -> SessionSummary:
    digest = summarize_transcript(transcript)
    return SessionSummary(
        report_id=report_id,
        generated_at=now or datetime.now(timezone.utc),
        **digest.model_dump(),
    )
