# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec


class Modifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


class KeyCode(enum.Enum):
    CHAR = enum.auto()
    BACKSPACE = enum.auto()
    TAB = enum.auto()
    BACKTAB = enum.auto()
    ENTER = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    DELETE = enum.auto()
    INSERT = enum.auto()
    ESC = enum.auto()
    F = enum.auto()
    NULL = enum.auto()


FUNCTION_KEY_RANGE = range(1, 13)

# Prefix letters in the order they are written back out.
MODIFIER_PREFIXES = (
    (Modifiers.CONTROL, "C"),
    (Modifiers.ALT, "A"),
    (Modifiers.SHIFT, "S"),
)

KEY_NAMES = {
    KeyCode.BACKSPACE: "BS",
    KeyCode.TAB: "Tab",
    KeyCode.ENTER: "CR",
    KeyCode.LEFT: "Left",
    KeyCode.RIGHT: "Right",
    KeyCode.UP: "Up",
    KeyCode.DOWN: "Down",
    KeyCode.HOME: "Home",
    KeyCode.END: "End",
    KeyCode.PAGE_UP: "PageUp",
    KeyCode.PAGE_DOWN: "PageDown",
    KeyCode.DELETE: "Del",
    KeyCode.INSERT: "Insert",
    KeyCode.ESC: "Esc",
    KeyCode.NULL: "",
}

# Characters that cannot be written bare inside a chord.
CHAR_NAMES = {
    "<": "lt",
    ">": "gt",
    " ": "Space",
}


class Key(msgspec.Struct, frozen=True):
    """A single key press: what was pressed, and which modifiers were held.

    ``char`` is set only for KeyCode.CHAR and ``number`` only for KeyCode.F.
    Uppercase characters and BACKTAB always carry SHIFT.
    """

    code: KeyCode
    modifiers: Modifiers = Modifiers.NONE
    char: typing.Optional[str] = None
    number: typing.Optional[int] = None

    @classmethod
    def character(cls, char: str, modifiers: Modifiers = Modifiers.NONE):
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        if char.isupper():
            modifiers |= Modifiers.SHIFT
        return cls(code=KeyCode.CHAR, modifiers=modifiers, char=char)

    @classmethod
    def function(cls, number: int, modifiers: Modifiers = Modifiers.NONE):
        if number not in FUNCTION_KEY_RANGE:
            raise ValueError(f"No such function key F{number}")
        return cls(code=KeyCode.F, modifiers=modifiers, number=number)

    @classmethod
    def named(cls, code: KeyCode, modifiers: Modifiers = Modifiers.NONE):
        if code is KeyCode.CHAR or code is KeyCode.F:
            raise ValueError(f"{code.name} keys need a value; use Key.character or Key.function")
        if code is KeyCode.BACKTAB:
            modifiers |= Modifiers.SHIFT
        return cls(code=code, modifiers=modifiers)

    @classmethod
    def parse(cls, notation: str) -> Key:
        "Parse notation which must describe exactly one key, such as '<C-x>' or 'q'."
        from .notation import NotationError, parse_notation

        keys = parse_notation(notation)
        if len(keys) != 1:
            raise NotationError(f"Expected exactly one key, found {len(keys)}", notation=notation)
        return keys[0]

    def with_modifiers(self, modifiers: Modifiers) -> Key:
        return msgspec.structs.replace(self, modifiers=self.modifiers | modifiers)

    def to_notation(self) -> str:
        modifiers = self.modifiers
        match self.code:
            case KeyCode.CHAR:
                if self.char.isupper():
                    # shift is implied by the uppercase letter itself
                    modifiers &= Modifiers.CONTROL | Modifiers.ALT
                if not modifiers and self.char not in CHAR_NAMES:
                    return self.char
                name = CHAR_NAMES.get(self.char, self.char)
            case KeyCode.F:
                name = f"F{self.number}"
            case KeyCode.BACKTAB:
                modifiers |= Modifiers.SHIFT
                name = "Tab"
            case _:
                name = KEY_NAMES[self.code]
        prefix = "".join(f"{letter}-" for flag, letter in MODIFIER_PREFIXES if flag in modifiers)
        return f"<{prefix}{name}>"

    def __str__(self):
        return self.to_notation()
