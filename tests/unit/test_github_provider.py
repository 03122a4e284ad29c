"""Unit tests for the GitHub repository listing provider."""

from __future__ import annotations

import httpx
import pytest

from resume_ats.providers.profile.github_provider import GitHubProfileProvider
from resume_ats.utils.errors import ProfileLookupError

_REPOS = [
    {"name": "payments-api", "language": "Python"},
    {"name": "dotfiles", "language": None},
    {"name": "ingest", "language": "Go"},
]


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestGitHubProfileProvider:
    @pytest.mark.asyncio
    async def test_lists_repositories(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_REPOS)

        async with _client(handler) as http:
            provider = GitHubProfileProvider(http)
            repos = await provider.list_repositories("janedoe")

        assert [r.name for r in repos] == ["payments-api", "dotfiles", "ingest"]
        assert [r.language for r in repos] == ["Python", None, "Go"]

        [request] = seen
        assert request.url.path == "/users/janedoe/repos"
        assert request.url.params["per_page"] == "100"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_token_sends_bearer_header(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(handler) as http:
            provider = GitHubProfileProvider(http, token="ghp_test")
            assert await provider.list_repositories("janedoe") == []

        assert seen[0].headers["Authorization"] == "Bearer ghp_test"

    @pytest.mark.asyncio
    async def test_custom_base_url(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        async with _client(handler) as http:
            provider = GitHubProfileProvider(http, base_url="https://ghe.example.com/api/v3/")
            await provider.list_repositories("jane")

        assert str(seen[0].url).startswith("https://ghe.example.com/api/v3/users/jane/repos")

    @pytest.mark.asyncio
    async def test_unknown_user_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        async with _client(handler) as http:
            provider = GitHubProfileProvider(http)
            with pytest.raises(ProfileLookupError, match="404") as exc_info:
                await provider.list_repositories("no-such-user")

        assert exc_info.value.provider_name == "github"

    @pytest.mark.asyncio
    async def test_rate_limit_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "API rate limit exceeded"})

        async with _client(handler) as http:
            with pytest.raises(ProfileLookupError):
                await GitHubProfileProvider(http).list_repositories("janedoe")

    @pytest.mark.asyncio
    async def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as http:
            with pytest.raises(ProfileLookupError):
                await GitHubProfileProvider(http).list_repositories("janedoe")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        async with _client(handler) as http:
            with pytest.raises(ProfileLookupError, match="non-JSON"):
                await GitHubProfileProvider(http).list_repositories("janedoe")

    @pytest.mark.asyncio
    async def test_non_list_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "unexpected"})

        async with _client(handler) as http:
            with pytest.raises(ProfileLookupError):
                await GitHubProfileProvider(http).list_repositories("janedoe")

    @pytest.mark.asyncio
    async def test_is_available_tracks_client(self) -> None:
        http = _client(lambda request: httpx.Response(200, json=[]))
        provider = GitHubProfileProvider(http)
        assert provider.is_available() is True

        await http.aclose()
        assert provider.is_available() is False
