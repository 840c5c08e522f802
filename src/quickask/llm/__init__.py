from .base import AnswerProvider
from .factory import create_answer_provider
from .models import (
    Candidate,
    Content,
    GenerateContentRequest,
    GenerateContentResponse,
    Part,
)
from .providers import GeminiProvider, HTTPAnswerProvider, gemini_endpoint

__all__ = [
    "AnswerProvider",
    "create_answer_provider",
    "Candidate",
    "Content",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "Part",
    "GeminiProvider",
    "HTTPAnswerProvider",
    "gemini_endpoint",
]
