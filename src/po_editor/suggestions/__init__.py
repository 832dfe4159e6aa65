"""AI translation suggestion client."""

from .engine import (
    GeminiBackend,
    OpenAIBackend,
    SuggestionEngine,
    build_prompt,
    parse_suggestions,
)

__all__ = [
    "GeminiBackend",
    "OpenAIBackend",
    "SuggestionEngine",
    "build_prompt",
    "parse_suggestions",
]
