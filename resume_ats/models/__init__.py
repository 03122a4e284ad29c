"""Domain models -- re-exports all public model classes.

    - conversation.py -- client turns, assembled prompts, prompt variants
    - profile.py      -- repository records returned by the profile provider
    - rag.py          -- stored fragments, search hits, ingestion summaries
"""

from __future__ import annotations

from resume_ats.models.conversation import (
    AssembledPrompt,
    ConversationTurn,
    EvaluationPromptVariant,
)
from resume_ats.models.profile import RepositoryRecord
from resume_ats.models.rag import Fragment, IngestionResult, RetrievedFragment

__all__ = [
    "AssembledPrompt",
    "ConversationTurn",
    "EvaluationPromptVariant",
    "Fragment",
    "IngestionResult",
    "RepositoryRecord",
    "RetrievedFragment",
]
