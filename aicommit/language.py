"""Languages for generated commit messages and their prompts."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from .prompts import select


def _format_section(label: str, summary: str, detail: str) -> list[str]:
    return [f"{label}:", f"{summary} \n\n", detail]


def _numbered_section(heading: str, items: Iterable[str]) -> list[str]:
    return [f"{heading}:", *(f"{number}. {item}" for number, item in enumerate(items, 1))]


def _compose(intro: str, body: list[str], closing: str, *, spaced: bool = False) -> str:
    """Join an intro, a fenced body and a closing line into one prompt."""
    gap = "\n\n" if spaced else "\n"
    fenced = "```\n" + "\n".join(body) + "\n```"
    return gap.join([intro, fenced, closing])


_EN_INTRO = (
    "You are an expert at creating commit messages. Based on the following Git diff, "
    "generate a compact and clear commit message following the format below."
)
_EN_FORMAT = _format_section(
    "Format",
    "<Summary of the change (preferably under 50 characters)>",
    "<Detailed explanation of the change if necessary "
    "(each line preferably under 72 characters)>",
)
_EN_TRAITS = _numbered_section(
    "Characteristics of a good commit message",
    [
        "Concise and clear",
        "Explains 'why' the change was made, not just what was changed",
        "Includes references to related issues or bug fixes",
    ],
)

_JA_INTRO = (
    "あなたは優れたコミットメッセージを作成するエキスパートです。"
    "以下のGitの差分に基づいて、"
    "以下のフォーマットに従ったコンパクトで明確なコミットメッセージを生成してください。"
)
_JA_FORMAT = _format_section(
    "フォーマット",
    "<変更の要約（50文字以内が望ましい）>",
    "<必要に応じて変更の詳細な説明（各行72文字以内が望ましい>",
)
_JA_TRAITS = _numbered_section(
    "良いコミットメッセージの特徴",
    [
        "簡潔で明確",
        "何が変更されたかではなく「なぜ」変更されたかを説明",
        "関連する課題やバグ修正への参照を含める",
    ],
)


def _closing_in(language_name: str) -> str:
    return f"Please generate the commit message in {language_name}."


_SYSTEM_PROMPTS = {
    "Japanese": _compose(
        _JA_INTRO,
        [*_JA_FORMAT, "", *_JA_TRAITS],
        "コミットメッセージは日本語で生成してください。",
    ),
    "English": _compose(_EN_INTRO, [*_EN_FORMAT, "", *_EN_TRAITS], _closing_in("English")),
    "Chinese": _compose(_EN_INTRO, _EN_FORMAT, _closing_in("Chinese"), spaced=True),
}

_USER_INTROS = {
    "Japanese": "以下のGit差分に基づいてコミットメッセージを生成してください：",
    "English": "Generate a commit message based on the following Git diff:",
    "Chinese": "根据以下Git差异生成提交消息：",
}


class Language(enum.Enum):
    """Language in which commit messages are written."""

    JAPANESE = "Japanese"
    ENGLISH = "English"
    CHINESE = "Chinese"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> Language:
        """The language used when none is configured."""
        return cls.JAPANESE

    def system_prompt(self) -> str:
        """The built-in system prompt for this language."""
        return _SYSTEM_PROMPTS[self.value]

    def user_prompt(self, diff: str) -> str:
        """The request sent to the model, wrapping ``diff`` in a code fence."""
        return f"{_USER_INTROS[self.value]}\n\n```\n{diff}\n```"


_LANGUAGE_OPTIONS = [
    ("Japanese (日本語)", Language.JAPANESE),
    ("English", Language.ENGLISH),
    ("Chinese (中文)", Language.CHINESE),
]


def select_language() -> Language:
    """Ask the user which language commit messages should be written in."""
    return select("Select language for commit messages", _LANGUAGE_OPTIONS)