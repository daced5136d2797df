"""Tests for interactive configuration."""

from decimal import Decimal
from pathlib import Path

import pytest

from medhelp.assemble.prompts import (
    ask_background,
    ask_background_settings,
    ask_delays,
    ask_volume,
    gather_configuration,
    parse_delay,
    parse_volume,
    parse_yes_no,
)
from medhelp.errors import InvalidUserInputError, MissingBackgroundFileError
from medhelp.types import Delay, InputFile


def _answers(*values):
    """input() replacement that replays values and records the prompts."""
    it = iter(values)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(it)

    fake_input.prompts = prompts
    return fake_input


@pytest.mark.parametrize("answer,expected", [
    ("y", True), ("Y", True), ("n", False), ("N", False), ("", False), (" y ", True),
])
def test_parse_yes_no(answer, expected):
    assert parse_yes_no(answer) is expected


@pytest.mark.parametrize("answer", ["yes", "no", "x", "1"])
def test_parse_yes_no_rejects(answer):
    with pytest.raises(InvalidUserInputError):
        parse_yes_no(answer)


@pytest.mark.parametrize("answer,expected", [
    ("30", Decimal("0.30")),
    ("7", Decimal("0.07")),
    ("1", Decimal("0.01")),
    ("100", Decimal("1.00")),
    ("", Decimal("0.30")),
])
def test_parse_volume(answer, expected):
    result = parse_volume(answer)
    assert result == expected
    assert str(result) == str(expected)


@pytest.mark.parametrize("answer", ["0", "101", "-5", "12.5", "abc"])
def test_parse_volume_rejects(answer):
    with pytest.raises(InvalidUserInputError):
        parse_volume(answer)


@pytest.mark.parametrize("answer,expected", [
    ("", Decimal("2.0")),
    ("0", Decimal("0")),
    ("3", Decimal("3")),
    ("1.5", Decimal("1.5")),
    ("4.", Decimal("4")),
])
def test_parse_delay(answer, expected):
    assert parse_delay(answer) == expected


@pytest.mark.parametrize("answer", ["-1", ".5", "1.2.3", "two", "1e3"])
def test_parse_delay_rejects(answer):
    with pytest.raises(InvalidUserInputError):
        parse_delay(answer)


def test_ask_background_reprompts(capsys):
    fake_input = _answers("maybe", "Y")
    assert ask_background(fake_input) is True
    assert len(fake_input.prompts) == 2
    assert "Please enter 'y' or 'n'" in capsys.readouterr().out


def test_ask_volume_reprompts(capsys):
    fake_input = _answers("0", "150", "25")
    assert ask_volume(fake_input) == Decimal("0.25")
    assert capsys.readouterr().out.count("between 1 and 100") == 2


def test_ask_delays_one_per_gap():
    files = [InputFile(Path(n)) for n in ("a.mp3", "b.mp3", "c.mp3")]
    fake_input = _answers("", "bad", "3.5")
    delays = ask_delays(files, fake_input)
    assert delays == (Delay(0, Decimal("2.0")), Delay(1, Decimal("3.5")))
    assert "'a.mp3' and 'b.mp3'" in fake_input.prompts[0]
    assert "'b.mp3' and 'c.mp3'" in fake_input.prompts[1]


def test_ask_delays_single_file_asks_nothing():
    fake_input = _answers()
    assert ask_delays([InputFile(Path("a.mp3"))], fake_input) == ()
    assert fake_input.prompts == []


def test_background_settings_disabled(tmp_path):
    fake_input = _answers("n")
    assert ask_background_settings(tmp_path / "missing.mp3", fake_input) == (False, None)


def test_background_settings_missing_file_fails_before_volume(tmp_path):
    fake_input = _answers("y", "30")
    with pytest.raises(MissingBackgroundFileError):
        ask_background_settings(tmp_path / "missing.mp3", fake_input)
    assert len(fake_input.prompts) == 1


def test_background_settings_enabled(tmp_path):
    bg = tmp_path / "background.mp3"
    bg.write_bytes(b"")
    fake_input = _answers("y", "7")
    assert ask_background_settings(bg, fake_input) == (True, Decimal("0.07"))


def test_gather_configuration(tmp_path):
    files = [InputFile(Path(n)) for n in ("a.mp3", "b.mp3")]
    config = gather_configuration(
        files,
        input_dir=tmp_path / "in",
        output_dir=tmp_path / "out",
        background_file=tmp_path / "bg.mp3",
        output_name="final.mp3",
        background=(True, Decimal("0.30")),
        input_fn=_answers("4"),
    )
    assert config.background_enabled
    assert config.background_volume == Decimal("0.30")
    assert config.delays == (Delay(0, Decimal("4")),)
    assert config.output_path == tmp_path / "out" / "final.mp3"


def test_end_of_input_takes_defaults():
    def closed(prompt):
        raise EOFError

    files = [InputFile(Path(n)) for n in ("a.mp3", "b.mp3")]
    assert ask_background(closed) is False
    assert ask_volume(closed) == Decimal("0.30")
    assert ask_delays(files, closed) == (Delay(0, Decimal("2.0")),)


def test_builtin_input_resolved_at_call_time(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "y")
    assert ask_background() is True
