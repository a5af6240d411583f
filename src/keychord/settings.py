# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import json
import logging
import pathlib
import typing

import attr
import cattrs
import tomli

from .bindings import KeyBindings
from .commontypes import KeychordError
from .notation import NotationError

logger = logging.getLogger(__name__)

DEFAULT_BINDINGS = {
    "<C-t>": "new-tab",
    "<C-w>": "close-tab",
    "<C-S-Tab>": "previous-tab",
    "<C-Tab>": "next-tab",
    "gg": "go-top",
    "G": "go-bottom",
    "<lt><lt>": "dedent",
    "<gt><gt>": "indent",
    "<Esc>": "cancel",
    "<F1>": "help",
}


settings_converter = cattrs.Converter()
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(pathlib.Path, str)


@attr.define(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path] = attr.field(default=None)
    allow_repeated_modifiers: bool = attr.field(default=True)
    bindings: dict[str, str] = attr.field(factory=dict)

    def make_keybindings(self) -> KeyBindings:
        keybindings = KeyBindings(allow_repeated_modifiers=self.allow_repeated_modifiers)
        for notation, action in self.bindings.items():
            try:
                keybindings.bind(notation, action)
            except NotationError as e:
                raise KeychordError(f"Invalid binding {notation!r} for action {action!r}: {e}") from e
        logger.debug("Loaded %d bindings", len(keybindings))
        return keybindings

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as f:
            json.dump(raw, f, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        if src.suffix == ".toml":
            with src.open("rb") as f:
                raw = tomli.load(f)
        else:
            with src.open() as f:
                raw = json.load(f)
        raw["_path"] = src
        settings = settings_converter.structure(raw, cls)
        # surface bad notation while loading, not when the bindings are first used
        settings.make_keybindings()
        return settings

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "allow_repeated_modifiers": True,
                "bindings": DEFAULT_BINDINGS,
            },
            cls,
        )
