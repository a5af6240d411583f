# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Parse Vim-style key notation into keys.

Notation is a run of tokens. A token is either a single literal character, or a
chord written between angle brackets, like ``<C-S-F11>``. A chord starts with any
number of modifier prefixes (``C-``, ``A-``, ``S-``) followed by a key name from
NAMED_KEYS or a single character. Literal angle brackets are written ``<lt>`` and
``<gt>``, and may themselves appear inside a chord: ``<S-<lt>>``.
"""
from __future__ import annotations

import logging

from .commontypes import KeychordError
from .keys import FUNCTION_KEY_RANGE, Key, KeyCode, Modifiers

logger = logging.getLogger(__name__)

CHORD_OPEN = "<"
CHORD_CLOSE = ">"

PREFIX_MODIFIERS = {
    "C-": Modifiers.CONTROL,
    "A-": Modifiers.ALT,
    "S-": Modifiers.SHIFT,
}

NAMED_KEYS = {
    "BS": Key.named(KeyCode.BACKSPACE),
    "Backspace": Key.named(KeyCode.BACKSPACE),
    "Tab": Key.named(KeyCode.TAB),
    "Enter": Key.named(KeyCode.ENTER),
    "CR": Key.named(KeyCode.ENTER),
    "Return": Key.named(KeyCode.ENTER),
    "Bslash": Key.character("\\"),
    "Bar": Key.character("|"),
    "lt": Key.character("<"),
    "gt": Key.character(">"),
    "Left": Key.named(KeyCode.LEFT),
    "Right": Key.named(KeyCode.RIGHT),
    "Up": Key.named(KeyCode.UP),
    "Down": Key.named(KeyCode.DOWN),
    "Home": Key.named(KeyCode.HOME),
    "End": Key.named(KeyCode.END),
    "PageUp": Key.named(KeyCode.PAGE_UP),
    "PageDown": Key.named(KeyCode.PAGE_DOWN),
    "Del": Key.named(KeyCode.DELETE),
    "Insert": Key.named(KeyCode.INSERT),
    "Esc": Key.named(KeyCode.ESC),
    "Space": Key.character(" "),
    **{f"F{number}": Key.function(number) for number in FUNCTION_KEY_RANGE},
    "": Key.named(KeyCode.NULL),
}


class NotationError(KeychordError, ValueError):
    def __init__(self, message: str, *, notation: str):
        super().__init__(message)
        self.notation = notation


class EmptyInput(NotationError):
    def __init__(self):
        super().__init__("Input must not be empty", notation="")


class UnterminatedChord(NotationError):
    def __init__(self, notation: str, position: int):
        super().__init__(f"Unterminated chord at position {position} in {notation!r}", notation=notation)
        self.position = position


class InvalidKeyName(NotationError):
    def __init__(self, name: str, chord: str):
        super().__init__(f"Invalid key {name!r} in chord {chord!r}", notation=chord)
        self.name = name
        self.chord = chord


class RepeatedModifier(NotationError):
    def __init__(self, modifier: Modifiers, chord: str):
        super().__init__(f"Modifier {modifier.name} given more than once in chord {chord!r}", notation=chord)
        self.modifier = modifier
        self.chord = chord


def find_chord_end(notation: str, start: int) -> int:
    """Return the index of the '>' closing the chord which opens at ``start``.

    Brackets nest, so the chord ends at the '>' which brings the depth back to zero.
    """
    if notation[start] != CHORD_OPEN:
        raise ValueError(f"No chord opens at position {start} in {notation!r}")
    depth = 0
    for index in range(start, len(notation)):
        char = notation[index]
        if char == CHORD_OPEN:
            depth += 1
        elif char == CHORD_CLOSE:
            depth -= 1
            if depth == 0:
                return index
    raise UnterminatedChord(notation, start)


def decode_modifiers(body: str, *, allow_repeated: bool = True, chord: str | None = None) -> tuple[Modifiers, str]:
    "Strip leading modifier prefixes from a chord body, returning the modifiers and whatever is left."
    modifiers = Modifiers.NONE
    index = 0
    while (prefix := body[index : index + 2]) in PREFIX_MODIFIERS:
        modifier = PREFIX_MODIFIERS[prefix]
        if modifier in modifiers and not allow_repeated:
            raise RepeatedModifier(modifier, chord if chord is not None else body)
        modifiers |= modifier
        index += 2
    return modifiers, body[index:]


def _is_single_chord(text: str) -> bool:
    return text.startswith(CHORD_OPEN) and find_chord_end(text, 0) == len(text) - 1


def resolve_chord(chord: str, *, allow_repeated_modifiers: bool = True) -> Key:
    """Turn a whole chord, brackets included, into one key."""
    if not _is_single_chord(chord):
        raise InvalidKeyName(chord, chord)
    modifiers, name = decode_modifiers(chord[1:-1], allow_repeated=allow_repeated_modifiers, chord=chord)

    # <S-<lt>> and friends: unwrap exactly one nested chord.
    if name.startswith(CHORD_OPEN):
        if not _is_single_chord(name):
            raise InvalidKeyName(name, chord)
        name = name[1:-1]

    key = NAMED_KEYS.get(name)
    if key is not None:
        if key.code is KeyCode.TAB and Modifiers.SHIFT in modifiers:
            key = Key.named(KeyCode.BACKTAB)
        key = key.with_modifiers(modifiers)
    elif len(name) == 1:
        key = Key.character(name, modifiers)
    else:
        raise InvalidKeyName(name, chord)
    logger.debug("Resolved chord %r to %s", chord, key)
    return key


def parse_notation(notation: str, *, allow_repeated_modifiers: bool = True) -> list[Key]:
    """Parse a notation string into the keys it describes, in order.

    Raises EmptyInput, UnterminatedChord, InvalidKeyName, or (when
    allow_repeated_modifiers is False) RepeatedModifier.
    """
    if not notation:
        raise EmptyInput()

    keys: list[Key] = []
    position = 0
    while position < len(notation):
        if notation[position] == CHORD_OPEN:
            end = find_chord_end(notation, position)
            keys.append(resolve_chord(notation[position : end + 1], allow_repeated_modifiers=allow_repeated_modifiers))
            position = end + 1
        else:
            keys.append(Key.character(notation[position]))
            position += 1
    return keys
