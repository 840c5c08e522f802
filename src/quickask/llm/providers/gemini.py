"""Google Gemini answer provider.

Uses the official Google GenAI SDK for async generation.
Reference: https://github.com/googleapis/python-genai

The SDK response is dumped back to plain JSON and parsed with the same
lenient model as the HTTP provider, so both providers agree on what counts
as an empty reply. Empty responses are not retried.
"""

from typing import Any

from google import genai
from google.genai import types

from ..base import AnswerProvider
from ..models import GenerateContentResponse

# Relaxed safety settings so ordinary questions are not blocked
DEFAULT_SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_ONLY_HIGH"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_ONLY_HIGH"),
]


class GeminiProvider(AnswerProvider):
    """Google Gemini answer provider.

    Hidden design decisions:
    - Google GenAI client initialization
    - Conversion of the SDK response into the wire model
    - Relaxed safety settings
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float | None = None,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Model name (gemini-2.5-flash, gemini-2.5-pro, ...)
            temperature: Optional sampling temperature
            **client_kwargs: Additional kwargs for genai.Client
        """
        self._model = model
        self._temperature = temperature
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    async def generate_content(self, question: str) -> GenerateContentResponse:
        """Generate a reply for a single question."""
        contents = [types.Content(role="user", parts=[types.Part(text=question)])]
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            safety_settings=DEFAULT_SAFETY_SETTINGS,
        )
        self._debug("debug", f"generate_content model={self._model}")

        response = await self._client.aio.models.generate_content(
            model=self._model,
            contents=contents,
            config=config
        )
        return GenerateContentResponse.parse_lenient(
            response.model_dump(mode="json", exclude_none=True)
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
