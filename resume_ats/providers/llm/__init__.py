"""LLM provider adapters."""

from resume_ats.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]
