"""Retrieval and prompt assembly for the query path.

Given the client's conversation, :class:`PromptAssembler`:

  1. takes the latest turn's content as the question,
  2. embeds it and fetches the ``top_k`` closest résumé fragments,
  3. serialises their texts as a JSON array (the context block),
  4. renders the configured evaluation template around context + question,
  5. prepends that system instruction to the original turns.

Retrieval is best-effort.  A blank question skips it, and any
:class:`DependencyFailure` from the embedder or the vector store becomes a
:class:`RetrievalDegradation` that is logged and swallowed: the prompt is
still built, with an empty context block.
"""

from __future__ import annotations

import json

from resume_ats.interfaces.embedding_provider import IEmbeddingProvider
from resume_ats.interfaces.vector_store_provider import IVectorStoreProvider
from resume_ats.models.conversation import (
    AssembledPrompt,
    ConversationTurn,
    EvaluationPromptVariant,
)
from resume_ats.models.rag import RetrievedFragment
from resume_ats.services.prompts import render_system_prompt
from resume_ats.utils.errors import DependencyFailure, RetrievalDegradation
from resume_ats.utils.logging import get_logger


class PromptAssembler:
    """Builds the model-ready message sequence for one question.

    Parameters
    ----------
    embedding_provider:
        Embeds the question for similarity search.
    vector_store:
        Source of candidate résumé fragments.
    variant:
        Which evaluation template to render.
    top_k:
        Number of fragments to retrieve (default 10).
    """

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        variant: EvaluationPromptVariant = EvaluationPromptVariant.ATS_REPORT,
        top_k: int = 10,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._variant = variant
        self._top_k = top_k
        self._logger = get_logger(__name__)

    async def assemble(self, turns: list[ConversationTurn]) -> AssembledPrompt:
        question = turns[-1].content if turns else ""

        context = ""
        fragments: list[RetrievedFragment] = []
        degraded = True
        if question.strip():
            try:
                fragments = await self._retrieve(question)
                context = json.dumps([fragment.text for fragment in fragments])
                degraded = False
            except RetrievalDegradation as exc:
                self._logger.warning(
                    "retrieval_degraded", error=str(exc), provider=exc.provider_name
                )
        else:
            self._logger.info("retrieval_skipped", reason="empty_question", turns=len(turns))

        system_prompt = render_system_prompt(self._variant, context, question)
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": turn.role, "content": turn.content} for turn in turns)

        return AssembledPrompt(
            system_prompt=system_prompt,
            messages=messages,
            context_fragments=len(fragments),
            retrieval_degraded=degraded,
        )

    async def _retrieve(self, question: str) -> list[RetrievedFragment]:
        try:
            vector = await self._embedding_provider.embed_single(question)
            fragments = await self._vector_store.search(vector, self._top_k)
        except DependencyFailure as exc:
            raise RetrievalDegradation(
                message=f"Retrieval failed: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc

        self._logger.info(
            "fragments_retrieved",
            count=len(fragments),
            top_score=fragments[0].similarity_score if fragments else None,
        )
        return fragments
