"""A minimal full-screen text editor for writing multi-line prompts."""

from __future__ import annotations

import enum
import sys

from blessed import Terminal

INSERT_MESSAGE = "-- INSERT MODE -- (Press Esc to exit, Ctrl+S to save)"
SAVED_MESSAGE = "Changes saved. Press Esc to exit."


class Key(enum.Enum):
    """Special keys understood by the editor."""

    ESC = "esc"
    SAVE = "ctrl-s"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    BACKSPACE = "backspace"


def _split_lines(text: str) -> list[str]:
    if not text:
        return [""]
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class Editor:
    """Line-oriented editor state with a cursor and a status message."""

    def __init__(self, text: str = "") -> None:
        self.lines: list[str] = _split_lines(text)
        self.cursor_x = 0
        self.cursor_y = 0
        self.message = INSERT_MESSAGE
        self.saved = False

    def handle_key(self, key: Key | str) -> bool:
        """Apply one key press; return True when the editor should close."""
        if key is Key.ESC:
            return True
        if key is Key.SAVE:
            self.message = SAVED_MESSAGE
            self.saved = True
            return True
        if key is Key.LEFT:
            if self.cursor_x > 0:
                self.cursor_x -= 1
        elif key is Key.RIGHT:
            if self.cursor_x < len(self.lines[self.cursor_y]):
                self.cursor_x += 1
        elif key is Key.UP:
            if self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))
        elif key is Key.DOWN:
            if self.cursor_y < len(self.lines) - 1:
                self.cursor_y += 1
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))
        elif key is Key.ENTER:
            self._break_line()
        elif key is Key.BACKSPACE:
            self._backspace()
        elif isinstance(key, str):
            for char in key:
                if char == "\n":
                    self._break_line()
                else:
                    self._insert(char)
        return False

    def _break_line(self) -> None:
        line = self.lines[self.cursor_y]
        self.lines[self.cursor_y] = line[: self.cursor_x]
        self.lines.insert(self.cursor_y + 1, line[self.cursor_x :])
        self.cursor_y += 1
        self.cursor_x = 0

    def _backspace(self) -> None:
        if self.cursor_x > 0:
            line = self.lines[self.cursor_y]
            self.lines[self.cursor_y] = line[: self.cursor_x - 1] + line[self.cursor_x :]
            self.cursor_x -= 1
        elif self.cursor_y > 0:
            removed = self.lines.pop(self.cursor_y)
            self.cursor_y -= 1
            self.cursor_x = len(self.lines[self.cursor_y])
            self.lines[self.cursor_y] += removed

    def _insert(self, char: str) -> None:
        if self.cursor_y >= len(self.lines):
            self.lines.append("")
        line = self.lines[self.cursor_y]
        self.lines[self.cursor_y] = line[: self.cursor_x] + char + line[self.cursor_x :]
        self.cursor_x += 1

    def contents(self) -> str:
        """The edited text, each line ending with a newline."""
        return "".join(f"{line}\n" for line in self.lines)

    def render(self) -> str:
        """The screen as plain text: the lines, a blank row and the status."""
        return "\n".join([*self.lines, "", self.message])

    def _draw(self, term: Terminal) -> None:
        out = [term.clear]
        for row, text in enumerate(self.render().split("\n")):
            out.append(term.move_xy(0, row) + text)
        out.append(term.move_xy(self.cursor_x, self.cursor_y))
        sys.stdout.write("".join(out))
        sys.stdout.flush()

    def run(self) -> str:
        """Edit interactively in the terminal and return the resulting text."""
        term = Terminal()
        with term.raw():
            self._draw(term)
            while True:
                key = _translate(term, term.inkey())
                if key is not None and self.handle_key(key):
                    break
                self._draw(term)
        closing = "Changes saved. Editor closed." if self.saved else "Editor closed."
        sys.stdout.write(term.clear + term.home)
        print(closing + "\n", flush=True)
        return self.contents()


def _translate(term: Terminal, keystroke) -> Key | str | None:
    if keystroke.is_sequence:
        sequences = {
            term.KEY_ESCAPE: Key.ESC,
            term.KEY_LEFT: Key.LEFT,
            term.KEY_RIGHT: Key.RIGHT,
            term.KEY_UP: Key.UP,
            term.KEY_DOWN: Key.DOWN,
            term.KEY_ENTER: Key.ENTER,
            term.KEY_BACKSPACE: Key.BACKSPACE,
        }
        return sequences.get(keystroke.code)
    text = str(keystroke)
    if text == "\x13":
        return Key.SAVE
    if text == "\x1b":
        return Key.ESC
    if text in ("\r", "\n"):
        return Key.ENTER
    if text in ("\x7f", "\x08"):
        return Key.BACKSPACE
    if text and (text == "\t" or text.isprintable()):
        return text
    return None