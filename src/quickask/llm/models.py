"""Wire models for the generateContent exchange.

Requests are built strictly. Responses are parsed leniently: any deviation
from the expected shape degrades to an empty reply instead of an error.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class Part(BaseModel):
    """A single content part."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = Field(default=None, description="Text of this part")


class Content(BaseModel):
    """A content block made of parts."""

    model_config = ConfigDict(extra="ignore")

    parts: list[Part] = Field(default_factory=list)


class Candidate(BaseModel):
    """One generated candidate."""

    model_config = ConfigDict(extra="ignore")

    content: Content | None = None


class GenerateContentRequest(BaseModel):
    """Outbound request body: {"contents": [{"parts": [{"text": ...}]}]}."""

    contents: list[Content]

    @classmethod
    def for_question(cls, question: str) -> "GenerateContentRequest":
        """Build a single-turn request for a question."""
        return cls(contents=[Content(parts=[Part(text=question)])])

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body sent over the wire."""
        return self.model_dump(exclude_none=True)


class GenerateContentResponse(BaseModel):
    """Inbound response body: {"candidates": [{"content": {"parts": [...]}}]}."""

    model_config = ConfigDict(extra="ignore")

    candidates: list[Candidate] = Field(default_factory=list)

    @classmethod
    def parse_lenient(cls, payload: Any) -> "GenerateContentResponse":
        """Parse a decoded JSON payload, returning an empty response on any shape mismatch.

        Only the first candidate and its first part are validated, so a
        malformed sibling never hides a usable reply.
        """
        if not isinstance(payload, dict):
            return cls()
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return cls()
        candidate = candidates[0]
        if isinstance(candidate, dict):
            content = candidate.get("content")
            if isinstance(content, dict) and isinstance(content.get("parts"), list):
                candidate = {**candidate, "content": {**content, "parts": content["parts"][:1]}}
        try:
            return cls(candidates=[Candidate.model_validate(candidate)])
        except ValidationError:
            return cls()

    @property
    def reply_text(self) -> str:
        """Text of the first candidate's first part, or "" when absent."""
        if not self.candidates:
            return ""
        content = self.candidates[0].content
        if content is None or not content.parts:
            return ""
        return content.parts[0].text or ""
