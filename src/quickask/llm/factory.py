from typing import Any

from .base import AnswerProvider
from .providers import GeminiProvider, HTTPAnswerProvider


def create_answer_provider(provider: str, **config: Any) -> AnswerProvider:
    """Create an answer provider instance.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type ('http', 'gemini')
        **config: Provider-specific configuration
            For HTTP:
                - url: str (required)
                - api_key: str | None
                - headers: dict[str, str] | None
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')

    Returns:
        Initialized answer provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_answer_provider(
        ...     "http",
        ...     url="https://example.com/v1/models/m:generateContent",
        ... )

        >>> provider = create_answer_provider(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "http":
        if "url" not in config:
            raise TypeError("HTTP provider requires 'url' in config")
        return HTTPAnswerProvider(**config)

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini provider requires 'api_key' in config")
        return GeminiProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'http', 'gemini'"
    )
