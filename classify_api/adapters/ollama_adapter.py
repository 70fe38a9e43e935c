import asyncio
import logging

import requests

from classify_api.interfaces.llm_provider import LLMProvider

# Initialize logger for the local LLM adapter
logger = logging.getLogger(__name__)


class OllamaAdapter(LLMProvider):
    """
    Adapter implementation for local LLMs using Ollama.
    Ensures complete data sovereignty with zero external API calls.
    """

    provider_name = "ollama"

    def __init__(
        self,
        host: str = "http://ollama:11434",
        model_name: str = "llama3",
        timeout: float = 60,
    ) -> None:
        self.api_url = f"{host.rstrip('/')}/api/generate"
        self.model_name = model_name
        self.timeout = timeout
        logger.info(f"Ollama Adapter initialized. Targeting model: {self.model_name} at {host}")

    def _post(self, prompt: str) -> str:
        response = requests.post(
            self.api_url,
            json={
                "model": self.model_name,
                "prompt": prompt,
                "stream": False,
                "options": {
                    "temperature": 0.0  # Zero temperature for deterministic extraction
                },
            },
            timeout=self.timeout,  # Extended timeout because local CPU inference is slow
        )
        response.raise_for_status()

        result = response.json()
        return result.get("response") or ""

    async def generate(self, prompt: str) -> str:
        # requests is synchronous; run it off the event loop
        return await asyncio.to_thread(self._post, prompt)
