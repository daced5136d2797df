"""Tests for input file discovery."""

import pytest

from medhelp.assemble.collect import collect_input_files, natural_sort_key
from medhelp.errors import InputDirectoryNotFoundError, NoInputFilesError


def test_natural_order(tmp_path):
    for name in ("a2.mp3", "a10.mp3", "a1.mp3"):
        (tmp_path / name).write_bytes(b"")
    files = collect_input_files(tmp_path)
    assert [f.name for f in files] == ["a1.mp3", "a2.mp3", "a10.mp3"]


def test_natural_sort_key_compares_numbers_by_value():
    names = ["clip10", "clip2", "Clip1", "clip2b"]
    assert sorted(names, key=natural_sort_key) == ["Clip1", "clip2", "clip2b", "clip10"]


def test_only_mp3_files_directly_inside(tmp_path):
    (tmp_path / "one.mp3").write_bytes(b"")
    (tmp_path / "TWO.MP3").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "folder.mp3").mkdir()
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "three.mp3").write_bytes(b"")

    files = collect_input_files(tmp_path)
    assert sorted(f.name for f in files) == ["TWO.MP3", "one.mp3"]
    assert all(f.duration is None for f in files)


def test_missing_directory(tmp_path):
    with pytest.raises(InputDirectoryNotFoundError):
        collect_input_files(tmp_path / "absent")


def test_empty_directory(tmp_path):
    (tmp_path / "readme.txt").write_text("no audio here")
    with pytest.raises(NoInputFilesError):
        collect_input_files(tmp_path)


def test_superscript_digits_are_plain_text(tmp_path):
    for name in ("part3.mp3", "part1²2.mp3"):
        (tmp_path / name).write_bytes(b"")
    files = collect_input_files(tmp_path)
    assert [f.name for f in files] == ["part1²2.mp3", "part3.mp3"]


def test_names_differing_only_in_case_have_stable_order(tmp_path):
    for name in ("a1.mp3", "A1.mp3", "a2.mp3"):
        (tmp_path / name).write_bytes(b"")
    files = collect_input_files(tmp_path)
    assert [f.name for f in files] == ["A1.mp3", "a1.mp3", "a2.mp3"]
