"""Configuration and settings persistence."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from architect.config.paths import get_paths

logger = logging.getLogger(__name__)

PROVIDERS = ("anthropic", "openai")
DEFAULT_MODELS = {
    "anthropic": "claude-sonnet-4-5",
    "openai": "gpt-4o",
}
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 8192


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().settings_file


def detect_terminal_theme() -> str:
    """Detect terminal light/dark preference."""
    # COLORFGBG is "fg;bg"; background index 7+ is typically light
    colorfgbg = os.environ.get("COLORFGBG", "")
    if colorfgbg:
        try:
            parts = colorfgbg.split(";")
            if len(parts) >= 2:
                bg = int(parts[-1])
                return "textual-light" if bg >= 7 else "textual-dark"
        except (ValueError, IndexError):
            pass
    return "textual-dark"


class Settings:
    """Persistent settings for Architect."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable settings at %s: %s", path, e)
                data = {}
            self._data = data if isinstance(data, dict) else {}
        else:
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            logger.info("Saved settings to %s", path)
        except OSError as e:
            logger.error("Failed to save settings: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw setting value."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._data[key] = value
        self._save()

    def _llm(self) -> dict[str, Any]:
        raw = self._data.get("llm", {})
        return raw if isinstance(raw, dict) else {}

    def _set_llm(self, key: str, value: Any) -> None:
        llm = self._llm()
        if value is None:
            llm.pop(key, None)
        else:
            llm[key] = value
        self.set("llm", llm)

    @property
    def plan_language(self) -> str:
        """Language the generated plan is written in."""
        return str(self._data.get("plan_language") or "English")

    @plan_language.setter
    def plan_language(self, value: str) -> None:
        self.set("plan_language", value)

    @property
    def theme(self) -> str:
        """Get the current theme, detecting from terminal if not set."""
        saved = self._data.get("theme")
        if saved:
            return str(saved)
        return detect_terminal_theme()

    @theme.setter
    def theme(self, value: str) -> None:
        self.set("theme", value)

    # --- LLM Provider Settings ---

    @property
    def llm_provider(self) -> str:
        """Get the LLM provider name ('anthropic' or 'openai')."""
        provider = str(self._llm().get("provider", "anthropic")).strip().lower()
        if provider not in PROVIDERS:
            logger.warning("Unknown LLM provider %r, using anthropic", provider)
            return "anthropic"
        return provider

    @llm_provider.setter
    def llm_provider(self, value: str) -> None:
        normalized = str(value).strip().lower()
        if normalized not in PROVIDERS:
            raise ValueError(f"Unknown LLM provider: {value}")
        self._set_llm("provider", normalized)

    @property
    def llm_model(self) -> str:
        """Get the LLM model name, or the provider default."""
        model = self._llm().get("model")
        if model:
            return str(model)
        return DEFAULT_MODELS[self.llm_provider]

    @llm_model.setter
    def llm_model(self, value: str | None) -> None:
        self._set_llm("model", value or None)

    @property
    def temperature(self) -> float:
        """Sampling temperature for generation, clamped to [0, 1]."""
        raw = self._llm().get("temperature", DEFAULT_TEMPERATURE)
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return DEFAULT_TEMPERATURE
        return min(1.0, max(0.0, value))

    @temperature.setter
    def temperature(self, value: float) -> None:
        self._set_llm("temperature", min(1.0, max(0.0, float(value))))

    @property
    def max_tokens(self) -> int:
        """Maximum tokens for the generated plan."""
        raw = self._llm().get("max_tokens", DEFAULT_MAX_TOKENS)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return DEFAULT_MAX_TOKENS
        return value if value > 0 else DEFAULT_MAX_TOKENS

    @max_tokens.setter
    def max_tokens(self, value: int) -> None:
        self._set_llm("max_tokens", int(value))

    @property
    def openai_api_key(self) -> str | None:
        """Get OpenAI API key from settings or environment.

        Priority: settings > OPENAI_API_KEY env var
        """
        key = self._llm().get("openai_api_key")
        if key:
            return str(key)
        return os.environ.get("OPENAI_API_KEY")

    @openai_api_key.setter
    def openai_api_key(self, value: str | None) -> None:
        self._set_llm("openai_api_key", value or None)

    @property
    def anthropic_api_key(self) -> str | None:
        """Get Anthropic API key from settings or environment.

        Priority: settings > ANTHROPIC_API_KEY env var
        """
        key = self._llm().get("anthropic_api_key")
        if key:
            return str(key)
        return os.environ.get("ANTHROPIC_API_KEY")

    @anthropic_api_key.setter
    def anthropic_api_key(self, value: str | None) -> None:
        self._set_llm("anthropic_api_key", value or None)

    @property
    def use_web_auth(self) -> bool:
        """Whether to use web auth for Anthropic (default True)."""
        return bool(self._llm().get("use_web_auth", True))

    @use_web_auth.setter
    def use_web_auth(self, value: bool) -> None:
        self._set_llm("use_web_auth", bool(value))


# Global settings instance
settings = Settings()
