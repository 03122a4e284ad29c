"""Pydantic request/response schemas for the résumé evaluation API.

Field names follow the wire contract used by the chat front end
(``extractedSkills``, ``githubUsername``), so a few schemas use camelCase
aliases rather than Python names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resume_ats.models.conversation import ConversationTurn


class UploadResumeResponse(BaseModel):
    """Successful résumé upload."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = "success"
    message: str = "Resume uploaded and stored successfully."
    extracted_skills: list[str] = Field(default_factory=list, alias="extractedSkills")


class UploadFailedResponse(BaseModel):
    """Generic upload failure; details stay in the server log."""

    status: str = "error"
    message: str = "Failed to upload resume."


class QueryRequest(BaseModel):
    """Conversation history; the last turn is the question."""

    messages: list[ConversationTurn] = Field(default_factory=list)


class QueryResponse(BaseModel):
    """Single-line evaluation report."""

    response: str


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str = "Server is Running"
    timestamp: str
    version: str
    providers: dict[str, Any] = Field(default_factory=dict)
