"""
Generation — grounded answers from retrieved context.

Public API
----------
- :class:`AnswerOrchestrator` — validate, retrieve, generate, attach provenance.
- :class:`AnswerResult` — detailed answer with sources and timing.
- :class:`GenerationService` — abstract chat-completion backend.
"""

from rag_assistant.generation.llm import ChatModelGenerator, GenerationService
from rag_assistant.generation.orchestrator import AnswerOrchestrator, AnswerResult

__all__ = [
    "AnswerOrchestrator",
    "AnswerResult",
    "ChatModelGenerator",
    "GenerationService",
]
