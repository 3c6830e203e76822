"""LLM initialisation and the generation-service seam.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``LLM_BASE_URL`` to e.g. an
   in-cluster vLLM service.  vLLM exposes ``/v1/chat/completions``, so
   ``ChatOpenAI`` works unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

from rag_assistant.config import Settings, settings
from rag_assistant.errors import ServiceError, Stage, service_stage
from rag_assistant.generation.prompts import build_messages

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

logger = logging.getLogger(__name__)


class GenerationService(ABC):
    """Chat-completion backend used to phrase the final answer."""

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        """Return the model's reply; raise ``ServiceError`` on failure."""
        ...


class ChatModelGenerator(GenerationService):
    """Adapter over a LangChain chat model."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        messages = build_messages(system_prompt, user_prompt)
        with service_stage(Stage.GENERATION):
            response = self._llm.invoke(messages, max_tokens=max_tokens)

        content = response.content
        if not isinstance(content, str):
            # Multi-part replies: keep only the text parts.
            content = "".join(
                part if isinstance(part, str) else part.get("text", "") for part in content
            )
        if not content:
            raise ServiceError(Stage.GENERATION, "empty response from chat model")
        return content


def get_llm(config: Settings = settings) -> ChatOpenAI:
    """Return the configured chat model.

    When ``llm_base_url`` is set the client is pointed at that endpoint
    instead of the OpenAI cloud API.  A dummy API key (``"EMPTY"``) is
    used because vLLM does not require authentication.
    """
    kwargs: dict = {
        "model": config.llm_model_name,
        "temperature": config.llm_temperature,
        "max_tokens": config.max_tokens,
        "timeout": config.request_timeout,
        "max_retries": 0,
    }

    if config.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", config.llm_base_url)
        kwargs["base_url"] = config.llm_base_url
        # vLLM doesn't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = config.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = config.openai_api_key or None

    return ChatOpenAI(**kwargs)
