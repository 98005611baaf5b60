"""Интеграция с Gemini (google-genai): клиент, промпты, схема ответа."""

from .gemini_client import GeminiClient, GroundedText
from .prompts import (
    build_identification_prompt,
    build_identification_schema,
    build_synopsis_prompt,
)

__all__ = [
    "GeminiClient",
    "GroundedText",
    "build_identification_prompt",
    "build_identification_schema",
    "build_synopsis_prompt",
]
