"""Abstract base class for LLM service providers.

Defines the contract for the generative model that writes the evaluation
report from the assembled prompt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAILLMProvider (resume_ats/providers/llm/)
class ILLMProvider(ABC):
    """Contract for chat-completion services used by the query path."""

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
    ) -> str:
        """Generate a single completion for a chat message sequence.

        Parameters
        ----------
        messages:
            Ordered ``{"role", "content"}`` mappings; the first is normally
            the system instruction.
        temperature:
            Sampling temperature.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        resume_ats.utils.errors.LLMError
            If the API call fails or returns no content.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are present."""
