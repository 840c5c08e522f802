from .gemini import GeminiProvider
from .http import HTTPAnswerProvider, gemini_endpoint

__all__ = ["GeminiProvider", "HTTPAnswerProvider", "gemini_endpoint"]
