"""Configuration for the PO editor and the suggestion service."""

import json
import logging
import os
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import click

logger = logging.getLogger(__name__)

APP_NAME = "po-editor"
SETTINGS_FILE = "settings.json"

# Environment variables used when no key is stored in the settings file
OPENAI_KEY_ENV = "OPENAI_API_KEY"
GEMINI_KEY_ENV = "GEMINI_API_KEY"

# Language code mappings for suggestion prompts
LANGUAGE_NAMES = {
    "es": "Spanish",
    "en": "English",
    "fr": "French",
    "de": "German",
    "pt": "Portuguese",
    "it": "Italian",
    "nl": "Dutch",
    "pl": "Polish",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
    "tr": "Turkish",
    "vi": "Vietnamese",
}


def get_language_name(code: str) -> str:
    """Get the display name for a catalog language code.

    Args:
        code: Language code, optionally with a region (e.g., "pt_BR").

    Returns:
        Display name (e.g., "Portuguese"), or the code itself if unknown.
    """
    lang_code = code.split("_")[0].lower()
    return LANGUAGE_NAMES.get(lang_code, code)


class AIProvider(Enum):
    """Supported suggestion providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


@dataclass
class AISettings:
    """Provider selection and API keys.

    Attributes:
        provider: Which provider to ask for suggestions.
        openai_key: OpenAI API key.
        gemini_key: Google Gemini API key.
    """
    provider: AIProvider = AIProvider.GEMINI
    openai_key: str = ""
    gemini_key: str = ""

    @property
    def api_key(self) -> str:
        """Key for the active provider."""
        if self.provider == AIProvider.OPENAI:
            return self.openai_key
        return self.gemini_key

    @property
    def has_key(self) -> bool:
        return bool(self.api_key)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["provider"] = self.provider.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AISettings":
        return cls(
            provider=AIProvider(data.get("provider", AIProvider.GEMINI.value)),
            openai_key=data.get("openai_key") or "",
            gemini_key=data.get("gemini_key") or "",
        )


@dataclass
class SuggestionConfig:
    """Configuration for the suggestion service.

    Attributes:
        openai_url: OpenAI chat completions endpoint.
        openai_model: OpenAI model name.
        gemini_url: Base URL of the Gemini models API.
        gemini_model: Gemini model name.
        temperature: Sampling temperature.
        max_output_tokens: Upper bound on generated tokens.
        timeout: Request timeout in seconds.
        max_suggestions: Maximum number of candidates returned.
        default_language: Target language when the catalog declares none.
    """
    openai_url: str = "https://api.openai.com/v1/chat/completions"
    openai_model: str = "gpt-5-mini"
    gemini_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_model: str = "gemini-2.5-flash"
    temperature: float = 0.7
    max_output_tokens: int = 200
    timeout: int = 60
    max_suggestions: int = 3
    default_language: str = "Spanish"


def default_settings_path() -> Path:
    """Location of the settings file in the user's config directory."""
    return Path(click.get_app_dir(APP_NAME)) / SETTINGS_FILE


def _with_env_keys(settings: AISettings) -> AISettings:
    settings.openai_key = settings.openai_key or os.environ.get(OPENAI_KEY_ENV, "")
    settings.gemini_key = settings.gemini_key or os.environ.get(GEMINI_KEY_ENV, "")
    return settings


def load_settings(
    path: Optional[Path] = None,
    use_env: bool = True
) -> AISettings:
    """Load AI settings from disk.

    Keys missing from the file fall back to environment variables. A missing
    or unreadable file yields the defaults.

    Args:
        path: Settings file. Defaults to the user's config directory.
        use_env: Whether empty keys fall back to environment variables.

    Returns:
        The loaded settings.
    """
    path = path or default_settings_path()
    settings = AISettings()

    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            settings = AISettings.from_dict(data)
        except (OSError, ValueError, AttributeError) as e:
            logger.error("Failed to load AI settings from %s: %s", path, e)

    return _with_env_keys(settings) if use_env else settings


def save_settings(settings: AISettings, path: Optional[Path] = None) -> Path:
    """Save AI settings to disk.

    Args:
        settings: Settings to store.
        path: Settings file. Defaults to the user's config directory.

    Returns:
        The path written.
    """
    path = path or default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    logger.debug("Saved AI settings to %s", path)
    return path
