"""AI translation suggestions with multiple provider backends."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

import requests

from ..config import AIProvider, AISettings, SuggestionConfig
from ..exceptions import SuggestionError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a professional translator. "
    "Provide accurate, natural translations."
)

# Leading "1." / "1)" numbering and "-", "•", "*" bullets
NUMBERING_PATTERN = re.compile(r'^\d+[.)]\s*')
BULLET_PATTERN = re.compile(r'^[-•*]\s*')


def build_prompt(
    text: str,
    target_language: str,
    context: Optional[str] = None
) -> str:
    """Build the suggestion prompt for a source string.

    Args:
        text: Source text (msgid).
        target_language: Display name of the target language.
        context: Optional comment describing where the text is used.

    Returns:
        Prompt asking for three translation variations.
    """
    prompt = (
        f"Translate the following text to {target_language}. "
        f"Provide exactly 3 different translation variations, each on a new line. "
        f"Only output the translations, no numbers, no explanations."
    )

    if context:
        prompt += f"\n\nContext: {context}"

    prompt += f'\n\nText: "{text}"'
    return prompt


def parse_suggestions(content: str, limit: int = 3) -> list[str]:
    """Parse model output into a list of candidate translations.

    Args:
        content: The model's response text.
        limit: Maximum number of candidates to keep.

    Returns:
        Cleaned, non-empty candidates in response order.
    """
    suggestions = []

    for line in content.split('\n'):
        cleaned = NUMBERING_PATTERN.sub('', line.strip())
        cleaned = BULLET_PATTERN.sub('', cleaned).strip()

        # Remove surrounding quotes (single or double)
        if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in '"\'':
            cleaned = cleaned[1:-1]

        if cleaned:
            suggestions.append(cleaned)

    return suggestions[:limit]


def _error_message(response: requests.Response, default: str) -> str:
    """Extract the provider's error message from a failed response."""
    try:
        error = response.json().get("error") or {}
        return error.get("message") or default
    except (ValueError, AttributeError):
        return default


class SuggestionBackend(ABC):
    """Abstract base class for suggestion backends."""

    name = "backend"

    def __init__(self, api_key: str, config: SuggestionConfig):
        self.api_key = api_key
        self.config = config

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Send a prompt and return the raw response text.

        Raises:
            SuggestionError: If the request fails or the provider rejects it.
        """

    def is_available(self) -> bool:
        """Check if the backend has credentials configured."""
        return bool(self.api_key)

    def _post(self, url: str, default_error: str, **kwargs) -> dict:
        try:
            response = requests.post(url, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            raise SuggestionError(f"{self.name} request failed: {e}") from e

        if not response.ok:
            message = _error_message(response, default_error)
            logger.warning("%s returned HTTP %s: %s", self.name, response.status_code, message)
            raise SuggestionError(message)

        try:
            return response.json()
        except ValueError as e:
            raise SuggestionError(f"{self.name} returned invalid JSON") from e


class OpenAIBackend(SuggestionBackend):
    """OpenAI chat completions backend."""

    name = "OpenAI"

    def complete(self, prompt: str) -> str:
        data = self._post(
            self.config.openai_url,
            "OpenAI API error",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": self.config.openai_model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": self.config.temperature,
                "max_completion_tokens": self.config.max_output_tokens,
            },
        )

        choices = data.get("choices") or [{}]
        return (choices[0].get("message") or {}).get("content") or ""


class GeminiBackend(SuggestionBackend):
    """Google Gemini generateContent backend."""

    name = "Gemini"

    def complete(self, prompt: str) -> str:
        url = f"{self.config.gemini_url.rstrip('/')}/{self.config.gemini_model}:generateContent"
        data = self._post(
            url,
            "Gemini API error",
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": self.config.temperature,
                    "maxOutputTokens": self.config.max_output_tokens,
                },
            },
        )

        candidates = data.get("candidates") or [{}]
        parts = (candidates[0].get("content") or {}).get("parts") or [{}]
        return parts[0].get("text") or ""


class SuggestionEngine:
    """Main suggestion engine that manages backends."""

    def __init__(
        self,
        config: Optional[SuggestionConfig] = None,
        settings: Optional[AISettings] = None
    ):
        """Initialize the suggestion engine.

        Args:
            config: Suggestion configuration. Uses defaults if not provided.
            settings: Provider selection and keys. Uses defaults if not provided.
        """
        self.config = config or SuggestionConfig()
        self.settings = settings or AISettings()
        self._backend: Optional[SuggestionBackend] = None

    @property
    def backend(self) -> SuggestionBackend:
        """Get or create the backend for the configured provider."""
        if self._backend is None:
            if self.settings.provider == AIProvider.OPENAI:
                self._backend = OpenAIBackend(self.settings.openai_key, self.config)
            else:
                self._backend = GeminiBackend(self.settings.gemini_key, self.config)
        return self._backend

    def suggest(
        self,
        text: str,
        target_language: str,
        context: Optional[str] = None
    ) -> list[str]:
        """Ask the provider for translation candidates.

        Args:
            text: Source text to translate.
            target_language: Display name of the target language.
            context: Optional comment passed along to the model.

        Returns:
            At most ``max_suggestions`` candidate translations.

        Raises:
            SuggestionError: If no key is configured or the request fails.
        """
        if not self.backend.is_available():
            raise SuggestionError(f"{self.backend.name} API key not configured")

        prompt = build_prompt(text, target_language, context)
        logger.debug("Requesting %s suggestions for %r", self.backend.name, text)

        content = self.backend.complete(prompt)
        return parse_suggestions(content, self.config.max_suggestions)

    def is_available(self) -> bool:
        """Check if the active provider has a key."""
        return self.backend.is_available()
