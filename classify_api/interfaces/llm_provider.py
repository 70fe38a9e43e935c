from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    This enforces a Strategy Pattern, allowing the application to swap
    the underlying model at startup without changing the extraction logic.
    """

    provider_name: str = "unknown"
    model_name: str = ""

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Sends a prompt to the model and returns the raw text reply.

        Args:
            prompt (str): The fully rendered prompt.

        Returns:
            str: The model output. May be empty.

        Raises:
            Exception: Any transport or API error. Implementations must not
                retry; the resolver owns the retry policy.
        """
        pass
