import logging

from google import genai
from google.genai import types

from classify_api.interfaces.llm_provider import LLMProvider

# Initialize logger for this module
logger = logging.getLogger(__name__)


class GeminiAdapter(LLMProvider):
    """
    Adapter implementation for Google Gemini API using the 'google-genai' SDK.
    Uses the async client so a slow model call never blocks other requests.
    """

    provider_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-flash-latest",
        timeout_ms: int = 30000,
    ) -> None:
        if not api_key:
            raise ValueError("Gemini API Key is missing.")

        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )
        self.model_name = model_name
        logger.info(f"Gemini Adapter initialized. Targeting model: {self.model_name}")

    async def generate(self, prompt: str) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=0.0  # Zero temperature for deterministic extraction
            ),
        )
        # response.text is None when the candidate carries no text parts
        return response.text or ""
