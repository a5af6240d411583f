# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import dataclasses
import logging
import typing

import pygtrie

from .commontypes import BindingError
from .notation import parse_notation

if typing.TYPE_CHECKING:
    from .keys import Key

logger = logging.getLogger(__name__)

KeySequence = tuple["Key", ...]


class KeyBindings:
    """Maps key sequences to actions.

    Sequences are stored in a trie, so each node knows which keys may follow it.
    Binding a sequence twice replaces the earlier action.
    """

    def __init__(self, *, allow_repeated_modifiers: bool = True):
        self.allow_repeated_modifiers = allow_repeated_modifiers
        self._trie = pygtrie.Trie()

    @classmethod
    def from_mapping(cls, mapping: collections.abc.Mapping[str, str], *, allow_repeated_modifiers: bool = True):
        bindings = cls(allow_repeated_modifiers=allow_repeated_modifiers)
        for notation, action in mapping.items():
            bindings.bind(notation, action)
        return bindings

    def bind(self, notation: str, action: str) -> KeySequence:
        keys = parse_notation(notation, allow_repeated_modifiers=self.allow_repeated_modifiers)
        return self.add(keys, action)

    def add(self, keys: collections.abc.Iterable[Key], action: str) -> KeySequence:
        sequence = tuple(keys)
        if not sequence:
            raise BindingError("Cannot bind an empty key sequence")
        if sequence in self._trie:
            logger.debug("Rebinding %s from %r to %r", _describe(sequence), self._trie[sequence], action)
        else:
            logger.debug("Binding %s to %r", _describe(sequence), action)
        self._trie[sequence] = action
        return sequence

    def lookup(self, keys: collections.abc.Iterable[Key]) -> typing.Optional[str]:
        sequence = tuple(keys)
        if not sequence:
            return None
        return self._trie.get(sequence)

    def is_prefix(self, keys: collections.abc.Iterable[Key]) -> bool:
        "True if some longer binding starts with these keys."
        return bool(self._trie.has_subtrie(tuple(keys)))

    def continuations(self, keys: collections.abc.Iterable[Key] = ()) -> set[Key]:
        "The keys which may come next after the given prefix."
        prefix = tuple(keys)
        if not self._trie.has_subtrie(prefix):
            return set()
        return {sequence[len(prefix)] for sequence in self._trie.iterkeys(prefix) if len(sequence) > len(prefix)}

    def items(self) -> list[tuple[KeySequence, str]]:
        return list(self._trie.iteritems())

    def __contains__(self, keys):
        return tuple(keys) in self._trie

    def __len__(self):
        return len(self._trie)


def _describe(sequence: collections.abc.Iterable[Key]) -> str:
    return "".join(str(key) for key in sequence)


@dataclasses.dataclass(kw_only=True)
class MatchFailed:
    keys: list[Key]


@dataclasses.dataclass(kw_only=True)
class MatchSucceeded:
    action: str
    keys: list[Key]


@dataclasses.dataclass(kw_only=True)
class MatchPending:
    keys: list[Key]


MatchResult = MatchFailed | MatchSucceeded | MatchPending


class SequenceMatcher:
    """Feeds typed keys through a KeyBindings, one at a time.

    The first complete binding wins, even if a longer binding shares its prefix.
    """

    pending: list[Key]

    def __init__(self, bindings: KeyBindings):
        self.bindings = bindings
        self.pending = []

    def reset(self):
        self.pending = []

    def handle_key(self, key: Key) -> MatchResult:
        self.pending.append(key)
        keys = self.pending
        action = self.bindings.lookup(keys)
        if action is not None:
            logger.debug("Matched %s to %r", _describe(keys), action)
            self.reset()
            return MatchSucceeded(action=action, keys=keys)
        if self.bindings.is_prefix(keys):
            return MatchPending(keys=list(keys))
        logger.debug("No binding for %s", _describe(keys))
        self.reset()
        return MatchFailed(keys=keys)
