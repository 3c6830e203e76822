"""Answer orchestration — retrieval, prompt assembly, generation, provenance."""

from __future__ import annotations

import logging
import time

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from rag_assistant.errors import Stage, ValidationError, service_stage
from rag_assistant.generation.llm import GenerationService
from rag_assistant.generation.prompts import SYSTEM_PROMPT, build_user_prompt
from rag_assistant.retrieval.retriever import SemanticRetriever

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 500


class AnswerResult(BaseModel):
    """Detailed answer returned to API clients.

    Serialises with camelCase aliases (``sourcesUsed``,
    ``processingTimeMs``) for existing clients.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    answer: str
    sources_used: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0


class AnswerOrchestrator:
    """Answers questions from the indexed corpus.

    Parameters
    ----------
    retriever:
        Produces the ranked context and source list.
    generator:
        Chat-completion backend.
    top_k:
        Matches requested per question.
    max_tokens:
        Output-length cap passed to the generator.
    """

    def __init__(
        self,
        retriever: SemanticRetriever,
        generator: GenerationService,
        *,
        top_k: int = 3,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._retriever = retriever
        self._generator = generator
        self.top_k = top_k
        self.max_tokens = max_tokens

    def answer(self, question: str, detailed: bool = False) -> AnswerResult | str:
        """Answer *question* from the indexed corpus.

        Both modes do the same retrieval and generation work; the minimal
        mode (``detailed=False``) returns only the answer text.

        Raises
        ------
        ValidationError
            *question* is empty after trimming.  No collaborator is called.
        ServiceError
            Embedding, retrieval or generation failed.  Nothing partial is
            returned.
        """
        if question is None or not question.strip():
            raise ValidationError("Question cannot be empty")

        start = time.perf_counter()
        logger.info("Processing question: %s", question)

        retrieval = self._retriever.retrieve(question, k=self.top_k)

        user_prompt = build_user_prompt(retrieval.context, question)
        with service_stage(Stage.GENERATION):
            answer = self._generator.complete(SYSTEM_PROMPT, user_prompt, self.max_tokens)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info("Generated answer in %dms from %d sources", elapsed_ms, len(retrieval.sources))

        if not detailed:
            return answer
        return AnswerResult(
            answer=answer,
            sources_used=retrieval.sources,
            processing_time_ms=elapsed_ms,
        )
