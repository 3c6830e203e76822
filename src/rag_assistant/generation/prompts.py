"""Prompt template for context-grounded answers.

The wording is fixed: answers produced against existing indexes were
generated with exactly this template.
"""

from __future__ import annotations

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

SYSTEM_PROMPT = "You are a helpful assistant that answers questions based on the provided context."

USER_PROMPT_TEMPLATE = "Context: {context}\n\nQuestion: {question}\n\nAnswer:"


def build_user_prompt(context: str, question: str) -> str:
    """Fill the user-role template with *context* and *question*."""
    return USER_PROMPT_TEMPLATE.format(context=context, question=question)


def build_messages(system_prompt: str, user_prompt: str) -> list[BaseMessage]:
    """Wrap the two prompts as LangChain messages ready for ``.invoke()``."""
    return [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt),
    ]
