"""Hosted LLM client construction.

A single OpenAI client is built lazily from settings and shared by the chat
assistant and the menu provider. With no `OPENAI_API_KEY` configured the
factory returns None and callers use their local fallbacks.
"""

from functools import lru_cache
from typing import Optional

from openai import OpenAI

from core.config import get_settings
from core.logger import get_logger

logger = get_logger("services.llm_client")


@lru_cache(maxsize=1)
def get_openai_client() -> Optional[OpenAI]:
    """Return the shared OpenAI client, or None when AI is not configured."""
    settings = get_settings()
    if not settings.ai_enabled:
        logger.info("OPENAI_API_KEY not set; hosted AI features use local fallbacks")
        return None
    return OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout_seconds)
