"""Persistent settings: AI platform, model, API keys, language and prompt."""

from __future__ import annotations

import enum
import json
import os
import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from .editor import Editor
from .language import Language, select_language
from .prompts import prompt_line, select


class Platform(enum.Enum):
    """AI service used to generate commit messages."""

    CLAUDE = "Claude"
    OPENAI = "OpenAI"
    GEMINI = "Gemini"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> Platform:
        """The platform used when none is configured."""
        return cls.CLAUDE

    def env_var_name(self) -> str:
        """Environment variable that may hold this platform's API key."""
        return {
            Platform.CLAUDE: "CLAUDE_API_KEY",
            Platform.OPENAI: "OPENAI_API_KEY",
            Platform.GEMINI: "GEMINI_API_KEY",
        }[self]

    def default_model_name(self) -> str:
        """Model used when the configuration selects none."""
        return {
            Platform.CLAUDE: "claude-3-opus-20240229",
            Platform.OPENAI: "gpt-4",
            Platform.GEMINI: "gemini-1.0-pro",
        }[self]

    def models(self) -> list[tuple[str, str]]:
        """Selectable models as ``(label, model id)`` pairs."""
        return {
            Platform.CLAUDE: [
                ("Claude 3.7 Sonnet", "claude-3-7-sonnet-20250219"),
                ("Claude 3.5 Sonnet", "claude-3-5-sonnet-20240620"),
                ("Claude 3.5 Haiku", "claude-3-5-haiku-20241022"),
            ],
            Platform.OPENAI: [
                ("o4-mini", "o4-mini"),
                ("GPT-4.1-mini", "gpt-4.1-mini"),
                ("o3-mini", "o3-mini"),
                ("GPT-4o-mini", "gpt-4o-mini"),
            ],
            Platform.GEMINI: [
                ("Gemini 2.0 Flash Lite", "gemini-2.0-flash-lite"),
                ("Gemini 2.0 Flash", "gemini-2.0-flash"),
                ("Gemini 1.5 Pro", "gemini-1.5-pro"),
            ],
        }[self]


def _optional_str(value: Any, name: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"{name} must be a string or null")


@dataclass
class ApiKeys:
    """API keys stored in the configuration file, one per platform."""

    claude: str | None = None
    openai: str | None = None
    gemini: str | None = None

    def get_key(self, platform: Platform) -> str | None:
        """The stored key for ``platform``, if any."""
        return getattr(self, platform.name.lower())

    def set_key(self, platform: Platform, key: str) -> None:
        """Store ``key`` for ``platform``."""
        setattr(self, platform.name.lower(), key)


@dataclass
class Config:
    """The user's settings."""

    api_keys: ApiKeys = field(default_factory=ApiKeys)
    language: Language = field(default_factory=Language.default)
    platform: Platform = field(default_factory=Platform.default)
    selected_model: str | None = None
    custom_prompt: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Read settings from ``path``; a missing or unreadable file gives defaults."""
        path = get_config_path() if path is None else Path(path)
        if not path.exists():
            return cls()
        text = path.read_text(encoding="utf-8")
        try:
            return cls.from_dict(json.loads(text))
        except ValueError:
            return cls()

    def save(self, path: Path | None = None) -> None:
        """Write settings to ``path`` as pretty-printed JSON."""
        path = get_config_path() if path is None else Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")

    def to_dict(self) -> dict[str, Any]:
        """The settings as a JSON-ready dictionary."""
        return {
            "api_keys": asdict(self.api_keys),
            "language": self.language.value,
            "platform": self.platform.value,
            "selected_model": self.selected_model,
            "custom_prompt": self.custom_prompt,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build settings from a dictionary; raises ValueError if it is malformed."""
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        try:
            entries = data["api_keys"]
            if not isinstance(entries, dict):
                raise ValueError("api_keys must be an object")
            stored = ApiKeys(
                **{
                    slot.name: _optional_str(entries.get(slot.name), slot.name)
                    for slot in fields(ApiKeys)
                }
            )
            language = Language(data["language"])
            platform = Platform(data["platform"])
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc
        return cls(
            api_keys=stored,
            language=language,
            platform=platform,
            selected_model=_optional_str(data.get("selected_model"), "selected_model"),
            custom_prompt=_optional_str(data.get("custom_prompt"), "custom_prompt"),
        )

    def get_api_key(self) -> str:
        """The key for the current platform, from the environment or the file.

        Raises ``LookupError`` when neither holds one.
        """
        name = self.platform.env_var_name()
        from_env = os.environ.get(name)
        if from_env is not None:
            return from_env
        stored = self.api_keys.get_key(self.platform)
        if stored is not None:
            return stored
        raise LookupError(
            f"{name} is not set. Please set it with 'ai_commit_cli config --api'"
        )

    def get_model_name(self) -> str:
        """The selected model, or the platform's default."""
        if self.selected_model is not None:
            return self.selected_model
        return self.platform.default_model_name()


def get_config_path() -> Path:
    """Location of the configuration file under the home directory."""
    return Path.home() / ".config" / "ai_commit_cli" / "config.json"


_PLATFORM_OPTIONS = [
    ("Claude (Anthropic)", Platform.CLAUDE),
    ("OpenAI (GPT)", Platform.OPENAI),
    ("Gemini (Google)", Platform.GEMINI),
]


def _select_platform() -> Platform:
    return select("Select AI platform for commit messages", _PLATFORM_OPTIONS)


def select_platform_and_model() -> tuple[Platform, str]:
    """Ask for a platform, then for one of its models."""
    platform = _select_platform()
    return platform, select_model(platform)


def select_model(platform: Platform) -> str:
    """Ask for one of ``platform``'s models and return its id."""
    return select(f"Select {platform} model", platform.models())


def input_api_key(platform: Platform) -> str:
    """Read an API key for ``platform`` from standard input."""
    return prompt_line(f"Enter {platform} API key: ")


def input_custom_prompt() -> str:
    """Edit the custom prompt in the terminal editor and return it."""
    print("Custom prompt editor will open. Press Ctrl+S to save and Esc to exit.")
    print("Write specific instructions for generating commit messages.")
    print(
        'For example: "You are an expert at creating concise and informative commit messages."'
    )
    print("\nPress Enter to continue...")
    sys.stdin.readline()

    initial = Config.load().custom_prompt or ""
    return Editor(initial).run().rstrip()


def _print_config(config: Config) -> None:
    print("Current configuration:")
    print(f"Language: {config.language}")
    print(f"Platform: {config.platform}")
    print(f"Model: {config.get_model_name()}")
    settings = (
        ("Claude API key", config.api_keys.claude),
        ("OpenAI API key", config.api_keys.openai),
        ("Gemini API key", config.api_keys.gemini),
        ("Custom prompt", config.custom_prompt),
    )
    for label, value in settings:
        print(f"{label}: {'Set' if value is not None else 'Not set'}")


def handle_config_command(
    api: bool = False, show: bool = False, language: bool = False, prompt: bool = False
) -> None:
    """Run the ``config`` command; with no flags it configures the API."""
    config = Config.load()

    if show:
        _print_config(config)
        return

    if api or not (language or prompt):
        platform, model = select_platform_and_model()
        config.platform = platform
        config.selected_model = model
        config.api_keys.set_key(platform, input_api_key(platform))
        config.save()
        print("API configuration and model saved successfully.")
        return

    if language:
        config.language = select_language()
        config.save()
        print(f"Language set to: {config.language}")

    if prompt:
        config.custom_prompt = input_custom_prompt()
        config.save()
        print("Custom prompt saved successfully.")