import logging
from typing import Optional

from classify_api.adapters.gemini_adapter import GeminiAdapter
from classify_api.adapters.ollama_adapter import OllamaAdapter
from classify_api.core.config import ExtractionSettings
from classify_api.interfaces.llm_provider import LLMProvider

logger = logging.getLogger(__name__)


def build_provider(settings: ExtractionSettings, api_key: Optional[str] = None) -> Optional[LLMProvider]:
    """
    Picks the LLM adapter for the configured provider.

    Returns None when the remote tier is disabled or its credential is
    missing; the resolver then runs in fallback-only mode.
    """
    if settings.provider == "none":
        logger.info("Remote extraction disabled by configuration, using fallback mode")
        return None

    if settings.provider == "gemini":
        if not api_key:
            logger.warning("GEMINI_API_KEY not found, using fallback mode")
            return None
        return GeminiAdapter(
            api_key,
            model_name=settings.gemini.model,
            timeout_ms=settings.gemini.timeout_ms,
        )

    if settings.provider == "ollama":
        return OllamaAdapter(
            host=settings.ollama.host,
            model_name=settings.ollama.model,
            timeout=settings.ollama.timeout,
        )

    raise ValueError(f"Unknown LLM provider: {settings.provider!r}")
