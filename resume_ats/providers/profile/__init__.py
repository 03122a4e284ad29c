"""Profile provider adapters."""

from resume_ats.providers.profile.github_provider import GitHubProfileProvider

__all__ = ["GitHubProfileProvider"]
