"""Unit tests for SkillExtractor."""

from __future__ import annotations

import pytest

from conftest import FakeProfileProvider
from resume_ats.models.profile import RepositoryRecord
from resume_ats.services.skill_extractor import SkillExtractor
from resume_ats.utils.errors import ProfileLookupError


class TestSkillExtractor:
    @pytest.mark.asyncio
    async def test_distinct_languages_in_first_seen_order(self, profile_provider) -> None:
        skills = await SkillExtractor(profile_provider).extract("janedoe")

        assert skills == ["Python", "Go", "TypeScript"]
        assert profile_provider.calls == ["janedoe"]

    @pytest.mark.asyncio
    async def test_no_repositories(self) -> None:
        assert await SkillExtractor(FakeProfileProvider(repos=[])).extract("new-user") == []

    @pytest.mark.asyncio
    async def test_blank_languages_are_ignored(self) -> None:
        provider = FakeProfileProvider(
            repos=[
                RepositoryRecord(name="a", language=""),
                RepositoryRecord(name="b", language="  "),
                RepositoryRecord(name="c", language=" Rust "),
                RepositoryRecord(name="d", language="Rust"),
            ]
        )
        assert await SkillExtractor(provider).extract("janedoe") == ["Rust"]

    @pytest.mark.asyncio
    async def test_lookup_failure_propagates(self) -> None:
        provider = FakeProfileProvider(
            error=ProfileLookupError(message="GitHub returned 404", provider_name="github")
        )
        with pytest.raises(ProfileLookupError):
            await SkillExtractor(provider).extract("no-such-user")
