"""Small line-based interactive prompts used by the configuration commands."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TypeVar

T = TypeVar("T")


def _read_line() -> str | None:
    """Read one line from standard input, or return None at end of input."""
    line = sys.stdin.readline()
    if line == "":
        return None
    return line


def prompt_line(message: str) -> str:
    """Show ``message`` without a newline and return the trimmed answer."""
    sys.stdout.write(message)
    sys.stdout.flush()
    line = _read_line()
    return "" if line is None else line.strip()


def select(message: str, options: Iterable[tuple[str, T]]) -> T:
    """Ask the user to pick one of ``options`` and return its value.

    ``options`` holds ``(label, value)`` pairs. An empty answer picks the
    first option; an answer that is not a valid number is asked again.
    Raises ``EOFError`` when input ends before a choice is made.
    """
    choices = list(options)
    if not choices:
        raise ValueError("no options to choose from")

    print(message)
    for number, (label, _) in enumerate(choices, start=1):
        print(f"  {number}) {label}")

    question = f"Choose [1-{len(choices)}] (default 1): "
    while True:
        sys.stdout.write(question)
        sys.stdout.flush()
        line = _read_line()
        if line is None:
            raise EOFError("input ended before a choice was made")
        answer = line.strip()
        if not answer:
            return choices[0][1]
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1][1]
        print(f"Please enter a number between 1 and {len(choices)}.")