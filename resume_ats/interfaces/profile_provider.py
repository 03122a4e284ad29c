"""Abstract base class for code-hosting profile providers.

The skill extractor derives a candidate's skill tags from the primary
languages of their public repositories, fetched through this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from resume_ats.models.profile import RepositoryRecord


# Concrete implementation: GitHubProfileProvider (resume_ats/providers/profile/)
class IProfileProvider(ABC):
    """Contract for repository listings of a public profile."""

    @abstractmethod
    async def list_repositories(self, username: str) -> list[RepositoryRecord]:
        """Return up to one page (100) of the user's public repositories.

        Raises
        ------
        resume_ats.utils.errors.ProfileLookupError
            On network failure, a non-success status (including an unknown
            user), or an unparseable response.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"github"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider can make requests."""
