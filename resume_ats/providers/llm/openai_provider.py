"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured the client points at that
URL instead of the default OpenAI endpoint, so any OpenAI-compatible chat
API can write the evaluation report.
"""

from __future__ import annotations

import openai
import structlog

from resume_ats.config.settings import Settings
from resume_ats.interfaces.llm_provider import ILLMProvider
from resume_ats.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

_REQUEST_TIMEOUT_SECONDS = 60.0


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat completions API.

    Uses ``gpt-4`` by default; override with ``OPENAI_CHAT_MODEL``.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        # Created on first use; the SDK refuses to construct without a key.
        self._client: openai.AsyncOpenAI | None = None
        self._model = settings.openai_chat_model or "gpt-4"
        self._provider_label = "openai-compatible" if settings.openai_base_url else "openai"

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
    ) -> str:
        """Request one chat completion for *messages*."""
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=temperature,
            )
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_label} timed out after {_REQUEST_TIMEOUT_SECONDS:.0f}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.choices or response.choices[0].message.content is None:
            raise LLMError(
                message=f"{self._provider_label} returned empty response",
                provider_name=self.get_provider_name(),
            )

        logger.info(
            "openai_completion",
            model=self._model,
            provider=self._provider_label,
            messages=len(messages),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return response.choices[0].message.content

    def get_provider_name(self) -> str:
        return self._provider_label

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)

    def _get_client(self) -> openai.AsyncOpenAI:
        if not self._api_key:
            raise LLMError(
                message="OPENAI_API_KEY is not configured",
                provider_name=self.get_provider_name(),
            )
        if self._client is None:
            client_kwargs: dict = {
                "api_key": self._api_key,
                "timeout": openai.Timeout(_REQUEST_TIMEOUT_SECONDS, connect=5.0),
            }
            if self._settings.openai_base_url:
                client_kwargs["base_url"] = self._settings.openai_base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
        return self._client
