"""Conversation and prompt models for the query path."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EvaluationPromptVariant(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Which evaluation template the prompt assembler renders.

    ATS_REPORT is the full structured report the service has always
    produced.  CONCISE trims the report to score, skills and verdict.
    RECRUITER_BRIEF rewrites the same facts as a short note for a hiring
    manager.
    """

    ATS_REPORT = "ats_report"
    CONCISE = "concise"
    RECRUITER_BRIEF = "recruiter_brief"


class ConversationTurn(BaseModel):
    """A single message in the client's conversation history."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description='Speaker role, e.g. "user" or "assistant".')
    content: str = Field(default="", description="Message text.")


class AssembledPrompt(BaseModel):
    """The model-ready message sequence built for one question.

    ``messages`` is the system instruction followed by the client's turns,
    unmodified and in order.
    """

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    messages: list[dict[str, str]] = Field(default_factory=list)
    context_fragments: int = Field(
        default=0, ge=0, description="How many retrieved fragments fed the context block."
    )
    retrieval_degraded: bool = Field(
        default=False,
        description="True when retrieval was skipped or failed and the context is empty.",
    )
