from abc import ABC, abstractmethod
from typing import Any

from .models import GenerateContentResponse


class AnswerProvider(ABC):
    """Abstract base class for answer providers.

    This module hides the design decision of how a question reaches the
    text-generation API. Implementations must handle:
    - Client setup and authentication
    - Request/response format conversion
    - Leniency toward unexpected response shapes

    Implementations never retry and never time out a request.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.generate_content(question)
        # Automatically cleaned up
    """

    _debug_callback: Any = None

    @abstractmethod
    async def generate_content(self, question: str) -> GenerateContentResponse:
        """Send one question and return the parsed response.

        Args:
            question: The question text, sent verbatim

        Returns:
            GenerateContentResponse (empty when the reply had an unexpected shape)

        Raises:
            Exception: Transport errors or an undecodable response body
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "LLM", message)

    async def __aenter__(self) -> "AnswerProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
