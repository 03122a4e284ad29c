"""Derives skill tags from the languages of a candidate's public repositories."""

from __future__ import annotations

from resume_ats.interfaces.profile_provider import IProfileProvider
from resume_ats.utils.logging import get_logger


class SkillExtractor:
    """Maps a profile username to a de-duplicated list of primary languages.

    Order is first-seen order in the repository listing.  Repositories with
    no detected language contribute nothing.  Lookup failures propagate as
    :class:`~resume_ats.utils.errors.ProfileLookupError`.
    """

    def __init__(self, profile_provider: IProfileProvider) -> None:
        self._profile_provider = profile_provider
        self._logger = get_logger(__name__)

    async def extract(self, username: str) -> list[str]:
        repos = await self._profile_provider.list_repositories(username)

        seen: set[str] = set()
        skills: list[str] = []
        for repo in repos:
            language = (repo.language or "").strip()
            if language and language not in seen:
                seen.add(language)
                skills.append(language)

        self._logger.info(
            "skills_extracted",
            username=username,
            repos=len(repos),
            skills=len(skills),
        )
        return skills
