"""Categorization backends.

A backend takes a prompt and returns the model's raw text answer. Backends
may raise; the resolver is responsible for turning failures into the default
category.
"""

from __future__ import annotations

import logging
from typing import Protocol

from langchain_groq import ChatGroq

from clarity.config import settings
from clarity.core.exceptions import CategorizationError

logger = logging.getLogger(__name__)


class CategorizationBackend(Protocol):
    async def complete(self, prompt: str) -> str:
        ...


class GroqBackend:
    """Hosted model reached through LangChain's Groq chat integration."""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ):
        self.model = model or settings.groq_model
        self.llm = ChatGroq(
            model=self.model,
            temperature=settings.llm_temperature if temperature is None else temperature,
            groq_api_key=api_key,
            timeout=timeout or settings.categorization_timeout_seconds,
            max_retries=0,
        )

    async def complete(self, prompt: str) -> str:
        response = await self.llm.ainvoke(prompt)
        content = response.content
        if not isinstance(content, str):
            raise CategorizationError(
                details={"model": self.model, "content_type": type(content).__name__}
            )
        return content


def build_backend() -> CategorizationBackend | None:
    """Build the configured backend, or None when no API key is set."""
    if not settings.groq_api_key:
        logger.info("GROQ_API_KEY not configured, category suggestions fall back to defaults")
        return None

    logger.info(f"Categorization backend initialized (Groq: {settings.groq_model})")
    return GroqBackend(api_key=settings.groq_api_key)
