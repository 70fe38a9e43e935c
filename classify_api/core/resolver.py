import asyncio
import json
import logging
import re
from typing import Optional

from pydantic import ValidationError

from classify_api.core.fallback import fallback_extract
from classify_api.core.models import (
    AttemptOutcome,
    ClassificationResult,
    ExtractionPayload,
    FailureKind,
)
from classify_api.core.retry import Sleep, linear_backoff, retry_with_backoff
from classify_api.core.utils import calculate_content_hash, truncate
from classify_api.interfaces.llm_provider import LLMProvider

PROMPT_TEMPLATE = """
Extract the following fields from the text:
- zip (postal code)
- brand
- category
- time_pref
If a field is missing, leave it empty.
Return ONLY valid JSON:
{{"zip": "string", "brand": "string", "category": "string", "time_pref": "string"}}

Text:
{text}
"""

# First '{' to last '}' of the reply, across newlines
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


def parse_model_output(content: str) -> AttemptOutcome[ClassificationResult]:
    """
    Turns a raw model reply into a result, or tags why it could not.
    """
    content = content.strip()
    if not content:
        return AttemptOutcome.failed(FailureKind.EMPTY_RESPONSE, "Empty AI response")

    json_match = JSON_OBJECT_PATTERN.search(content)
    if not json_match:
        return AttemptOutcome.failed(
            FailureKind.NO_JSON_FOUND, f"No JSON found in AI output: '{truncate(content)}'"
        )

    try:
        parsed = json.loads(json_match.group(0))
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and the int digit limit; RecursionError deep nesting
        return AttemptOutcome.failed(
            FailureKind.MALFORMED_JSON, f"Invalid JSON in AI output: {type(e).__name__}: {truncate(str(e))}"
        )

    try:
        payload = ExtractionPayload.model_validate(parsed)
    except ValidationError as e:
        return AttemptOutcome.failed(
            FailureKind.SCHEMA_VIOLATION,
            f"Invalid structure in AI output ({e.error_count()} errors)",
        )

    return AttemptOutcome.success(payload.to_result())


class ExtractionResolver:
    """
    Two-tier field extraction.

    Asks the configured LLM provider first, retrying failed attempts with a
    linear backoff. When no provider is configured, or every attempt fails,
    the deterministic regex extractor produces the result. `resolve` never
    raises.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        max_attempts: int = 3,
        backoff_ms: int = 500,
        sleep: Sleep = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self._provider = provider
        self.max_attempts = max_attempts
        self._backoff = linear_backoff(backoff_ms / 1000)
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)

        if provider is not None:
            self._logger.info(
                f"AI extraction enabled via {provider.provider_name} ({provider.model_name})"
            )
        else:
            self._logger.warning("No LLM provider configured, using fallback mode")

    @property
    def mode(self) -> str:
        return "ai" if self._provider is not None else "fallback"

    @property
    def provider_name(self) -> Optional[str]:
        return self._provider.provider_name if self._provider is not None else None

    async def resolve(self, text: str) -> ClassificationResult:
        if not text or not text.strip():
            self._logger.debug("Empty text received, returning default result")
            return ClassificationResult()

        text_hash = calculate_content_hash(text)[:12]

        if self._provider is not None:
            outcome = await self._resolve_remote(text, text_hash)
            if outcome.ok and outcome.value is not None:
                self._logger.info(
                    "Classification resolved by AI",
                    extra={"text_hash": text_hash, "source": "ai"},
                )
                return outcome.value

            self._logger.error(
                "All AI attempts failed, switching to fallback mode",
                extra={
                    "text_hash": text_hash,
                    "attempts": self.max_attempts,
                    "last_failure": outcome.failure.value if outcome.failure else None,
                },
            )

        self._logger.debug("Using fallback regex classification")
        result = fallback_extract(text)
        self._logger.info(
            f"Fallback classification result: {result.model_dump_json()}",
            extra={"text_hash": text_hash, "source": "fallback"},
        )
        return result

    async def _resolve_remote(self, text: str, text_hash: str) -> AttemptOutcome[ClassificationResult]:
        prompt = build_prompt(text)

        def log_failure(attempt: int, outcome: AttemptOutcome[ClassificationResult]) -> None:
            self._logger.warning(
                f"AI classify attempt {attempt} failed: {outcome.reason}",
                extra={
                    "text_hash": text_hash,
                    "attempt": attempt,
                    "max_attempts": self.max_attempts,
                    "failure": outcome.failure.value if outcome.failure else None,
                },
            )

        return await retry_with_backoff(
            lambda attempt: self._attempt(prompt, attempt),
            max_attempts=self.max_attempts,
            backoff=self._backoff,
            sleep=self._sleep,
            on_failure=log_failure,
        )

    async def _attempt(self, prompt: str, attempt: int) -> AttemptOutcome[ClassificationResult]:
        self._logger.debug(f"AI classification attempt {attempt} started")
        try:
            content = await self._provider.generate(prompt)
        except Exception as e:
            # Any transport/API error is just another failed attempt
            return AttemptOutcome.failed(
                FailureKind.REMOTE_CALL_FAILURE, f"{type(e).__name__}: {e}"
            )

        outcome = parse_model_output(content or "")
        if outcome.ok:
            self._logger.debug(f"AI classification successful on attempt {attempt}")
        return outcome
