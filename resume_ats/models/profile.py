"""Repository records returned by a code-hosting profile lookup."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RepositoryRecord(BaseModel):
    """One public repository of a candidate.

    Only ``language`` feeds skill extraction; ``name`` is kept for logging.
    GitHub reports ``language`` as null for repositories without detectable
    source files.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    language: str | None = None
