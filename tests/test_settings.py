import json
import pathlib

import pytest

from keychord.commontypes import KeychordError
from keychord.keys import Key, Modifiers
from keychord.notation import InvalidKeyName, NotationError, RepeatedModifier, parse_notation
from keychord.settings import DEFAULT_BINDINGS, Settings


def test_for_test():
    settings = Settings.for_test()
    assert settings.allow_repeated_modifiers is True
    keybindings = settings.make_keybindings()
    assert len(keybindings) == len(DEFAULT_BINDINGS)
    assert keybindings.lookup(parse_notation("<F1>")) == "help"


def test_load_json(tmp_path: pathlib.Path):
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"allow_repeated_modifiers": False, "bindings": {"<C-x><C-s>": "save"}}))
    settings = Settings.load(path)
    assert settings.allow_repeated_modifiers is False
    assert settings.bindings == {"<C-x><C-s>": "save"}
    keybindings = settings.make_keybindings()
    assert keybindings.lookup(parse_notation("<C-x><C-s>")) == "save"


def test_load_toml(tmp_path: pathlib.Path):
    path = tmp_path / "keys.toml"
    path.write_text(
        "\n".join(
            [
                "allow_repeated_modifiers = true",
                "",
                "[bindings]",
                '"<C-t>" = "new-tab"',
                '"<S-<lt>>" = "shift-less-than"',
                '"gg" = "go-top"',
            ]
        )
    )
    settings = Settings.load(path)
    keybindings = settings.make_keybindings()
    assert len(keybindings) == 3
    assert keybindings.lookup([Key.character("<", Modifiers.SHIFT)]) == "shift-less-than"


def test_defaults_when_missing(tmp_path: pathlib.Path):
    path = tmp_path / "empty.json"
    path.write_text("{}")
    settings = Settings.load(path)
    assert settings.allow_repeated_modifiers is True
    assert settings.bindings == {}


def test_save_round_trip(tmp_path: pathlib.Path):
    settings = Settings.for_test()
    dest = tmp_path / "saved.json"
    settings.save(dest)
    raw = json.loads(dest.read_text())
    assert "_path" not in raw
    assert raw["bindings"] == DEFAULT_BINDINGS
    reloaded = Settings.load(dest)
    assert reloaded.bindings == settings.bindings


def test_invalid_binding_names_the_binding():
    settings = Settings(bindings={"<Nope>": "nothing"})
    with pytest.raises(KeychordError) as excinfo:
        settings.make_keybindings()
    e = excinfo.value
    assert "'<Nope>'" in e.args[0]
    assert isinstance(e.__cause__, InvalidKeyName)


def test_strict_settings_reject_repeated_modifiers():
    settings = Settings(allow_repeated_modifiers=False, bindings={"<C-C-x>": "cut"})
    with pytest.raises(KeychordError) as excinfo:
        settings.make_keybindings()
    assert isinstance(excinfo.value.__cause__, RepeatedModifier)


@pytest.mark.parametrize(
    "filename,contents",
    (
        ("bad.json", '{"bindings": {"<Nope>": "nothing"}}'),
        ("bad.toml", '[bindings]\n"<C-t" = "new-tab"\n'),
        ("strict.json", '{"allow_repeated_modifiers": false, "bindings": {"<C-C-x>": "cut"}}'),
    ),
)
def test_load_rejects_bad_notation(tmp_path: pathlib.Path, filename: str, contents: str):
    path = tmp_path / filename
    path.write_text(contents)
    with pytest.raises(KeychordError) as excinfo:
        Settings.load(path)
    assert isinstance(excinfo.value.__cause__, NotationError)
