"""GitHub REST API provider implementing IProfileProvider.

Lists a user's public repositories with one request
(``GET /users/{username}/repos?per_page=100``).  The ``httpx.AsyncClient``
is injected for testability and connection pooling.  Every failure is
raised as :class:`ProfileLookupError` because ingestion cannot continue
without the candidate's skill tags.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from resume_ats.interfaces.profile_provider import IProfileProvider
from resume_ats.models.profile import RepositoryRecord
from resume_ats.utils.errors import ProfileLookupError
from resume_ats.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://api.github.com"
_PER_PAGE = 100
_ACCEPT = "application/vnd.github+json"


class GitHubProfileProvider(IProfileProvider):
    """Profile provider backed by the public GitHub REST API.

    When *token* is given, requests carry ``Authorization: Bearer <token>``,
    which raises the rate limit from 60 to 5000 requests per hour.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _DEFAULT_BASE_URL,
    ) -> None:
        self._http = http_client
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._logger = get_logger(__name__)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": _ACCEPT}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    # -- IProfileProvider implementation ---------------------------------------

    async def list_repositories(self, username: str) -> list[RepositoryRecord]:
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        try:
            response = await self._http.get(
                url, params={"per_page": _PER_PAGE}, headers=self._headers()
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "github_http_error", username=username, status=exc.response.status_code
            )
            raise ProfileLookupError(
                message=f"GitHub returned {exc.response.status_code} for user {username!r}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            self._logger.warning("github_request_failed", username=username, error=str(exc))
            raise ProfileLookupError(
                message=f"GitHub request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise ProfileLookupError(
                message="GitHub returned a non-JSON response",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(payload, list):
            raise ProfileLookupError(
                message="GitHub repository listing was not a list",
                provider_name=self.get_provider_name(),
            )

        repos = [
            RepositoryRecord(name=str(item.get("name") or ""), language=item.get("language"))
            for item in payload
            if isinstance(item, dict)
        ]
        self._logger.info(
            "github_repos_fetched",
            username=username,
            repos=len(repos),
            authenticated=bool(self._token),
        )
        return repos

    def get_provider_name(self) -> str:
        return "github"

    def is_available(self) -> bool:
        return not self._http.is_closed
