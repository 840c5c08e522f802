"""Plain HTTP answer provider.

POSTs the generateContent JSON body to a configurable endpoint with httpx.
The status code is not treated as an error: whatever JSON comes back is
parsed leniently, so an error body simply yields an empty reply.
"""

from typing import Any

import httpx

from ..base import AnswerProvider
from ..models import GenerateContentRequest, GenerateContentResponse

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def gemini_endpoint(model: str, base_url: str = GEMINI_BASE_URL) -> str:
    """Build the generateContent URL for a Gemini model."""
    return f"{base_url.rstrip('/')}/models/{model}:generateContent"


class HTTPAnswerProvider(AnswerProvider):
    """Answer provider speaking raw JSON over HTTP.

    Hidden design decisions:
    - httpx async client lifecycle
    - API key transport (x-goog-api-key header)
    - No timeout: the request resolves only when the server answers or the
      transport fails
    """

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        headers: dict[str, str] | None = None,
        **client_kwargs: Any
    ):
        """Initialize HTTP provider.

        Args:
            url: Full endpoint URL receiving the POST
            api_key: Optional API key, sent as x-goog-api-key
            headers: Extra request headers
            **client_kwargs: Additional kwargs for httpx.AsyncClient (e.g. transport)
        """
        self._url = url
        request_headers = {"Content-Type": "application/json"}
        if api_key:
            request_headers["x-goog-api-key"] = api_key
        if headers:
            request_headers.update(headers)
        client_kwargs.setdefault("timeout", None)
        self._client = httpx.AsyncClient(headers=request_headers, **client_kwargs)

    @property
    def url(self) -> str:
        """Get the endpoint URL."""
        return self._url

    async def generate_content(self, question: str) -> GenerateContentResponse:
        """POST the question and parse the JSON reply.

        Raises:
            httpx.HTTPError: On transport failure
            ValueError: If the body is not valid JSON
        """
        payload = GenerateContentRequest.for_question(question).to_payload()
        self._debug("debug", f"POST {self._url}")

        response = await self._client.post(self._url, json=payload)
        if not response.is_success:
            self._debug("warning", f"Provider answered HTTP {response.status_code}")

        data = response.json()
        parsed = GenerateContentResponse.parse_lenient(data)
        if not parsed.candidates:
            self._debug("warning", "Response had no candidates, using empty reply")
        return parsed

    async def close(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()
