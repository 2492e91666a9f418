"""A single-line text input with a cursor."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class EditKey(Enum):
    """Non-character keys that may reach a line input."""

    LEFT = "left"
    RIGHT = "right"
    BACKSPACE = "backspace"
    UP = "up"
    DOWN = "down"
    DELETE = "delete"
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"


class InputEffect(Enum):
    """What a consumed key did to the input."""

    TEXT_CHANGED = "text_changed"
    CURSOR_MOVED = "cursor_moved"
    # The key was consumed but changed nothing, e.g. backspace on empty text.
    ACK = "ack"


Key = Union[str, EditKey]


class LineInput:
    """Editable text whose cursor starts at the beginning."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    def input(self, key: Key, modified: bool = False) -> Optional[InputEffect]:
        """Apply a key press; return None if the input does not handle it.

        Keys pressed together with a modifier are never handled.
        """
        if modified:
            return None
        if isinstance(key, str):
            if len(key) != 1:
                raise ValueError(f"expected a single character, got {key!r}")
            self._text = self._text[: self._cursor] + key + self._text[self._cursor :]
            self._cursor += 1
            return InputEffect.TEXT_CHANGED
        if key is EditKey.BACKSPACE:
            if not self._text or self._cursor == 0:
                return InputEffect.ACK
            self._cursor -= 1
            self._text = self._text[: self._cursor] + self._text[self._cursor + 1 :]
            return InputEffect.TEXT_CHANGED
        if key is EditKey.LEFT:
            if self._cursor == 0:
                return InputEffect.ACK
            self._cursor -= 1
            return InputEffect.CURSOR_MOVED
        if key is EditKey.RIGHT:
            if self._cursor == len(self._text):
                return InputEffect.ACK
            self._cursor += 1
            return InputEffect.CURSOR_MOVED
        return None

    def segments(self, is_active: bool) -> list[tuple[str, bool]]:
        """Text pieces for display, each paired with whether it is the highlighted cursor.

        An inactive input is shown as plain text. An active one shows the
        character under the cursor highlighted, or a highlighted space at the end.
        """
        if not is_active:
            return [(self._text, False)]
        before = self._text[: self._cursor]
        if self._cursor == len(self._text):
            cursor, after = " ", ""
        else:
            cursor = self._text[self._cursor]
            after = self._text[self._cursor + 1 :]
        return [(before, False), (cursor, True), (after, False)]

    def is_empty(self) -> bool:
        return not self._text

    def get_text(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineInput):
            return NotImplemented
        return (self._text, self._cursor) == (other._text, other._cursor)

    def __repr__(self) -> str:
        return f"LineInput(text={self._text!r}, cursor={self._cursor})"