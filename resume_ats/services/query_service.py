"""Answers hiring questions against the stored résumé fragments."""

from __future__ import annotations

from resume_ats.interfaces.llm_provider import ILLMProvider
from resume_ats.models.conversation import ConversationTurn
from resume_ats.services.prompt_assembler import PromptAssembler
from resume_ats.utils.logging import get_logger


class QueryService:
    """Assembles the prompt, asks the model once, and flattens the reply.

    Stateless across requests: every call is a fresh retrieval and a single
    completion.  :class:`~resume_ats.utils.errors.LLMError` propagates
    unchanged; there is no partial reply.
    """

    def __init__(
        self,
        assembler: PromptAssembler,
        llm: ILLMProvider,
        temperature: float = 0.7,
    ) -> None:
        self._assembler = assembler
        self._llm = llm
        self._temperature = temperature
        self._logger = get_logger(__name__)

    async def answer(self, turns: list[ConversationTurn]) -> str:
        prompt = await self._assembler.assemble(turns)
        reply = await self._llm.complete(prompt.messages, temperature=self._temperature)

        # Single-line reply for the chat client.
        flattened = reply.replace("\n", " ")

        self._logger.info(
            "query_answered",
            turns=len(turns),
            context_fragments=prompt.context_fragments,
            retrieval_degraded=prompt.retrieval_degraded,
            reply_length=len(flattened),
        )
        return flattened
