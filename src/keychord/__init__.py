from .bindings import KeyBindings, MatchFailed, MatchPending, MatchResult, MatchSucceeded, SequenceMatcher
from .commontypes import BindingError, KeychordError
from .keys import Key, KeyCode, Modifiers
from .notation import (
    EmptyInput,
    InvalidKeyName,
    NotationError,
    RepeatedModifier,
    UnterminatedChord,
    find_chord_end,
    parse_notation,
    resolve_chord,
)

__all__ = [
    "BindingError",
    "EmptyInput",
    "InvalidKeyName",
    "Key",
    "KeyBindings",
    "KeyCode",
    "KeychordError",
    "MatchFailed",
    "MatchPending",
    "MatchResult",
    "MatchSucceeded",
    "Modifiers",
    "NotationError",
    "RepeatedModifier",
    "SequenceMatcher",
    "UnterminatedChord",
    "find_chord_end",
    "parse_notation",
    "resolve_chord",
]
