"""Unit tests for the single-file writer (jlscaffold.scaffolder.files)."""

from __future__ import annotations

from pathlib import Path

import pytest

from jlscaffold.scaffolder.files import gen_file

pytestmark = pytest.mark.unit


class TestGenFile:
    def test_appends_missing_newline(self, tmp_path: Path):
        target = tmp_path / "README.md"
        written = gen_file(target, "# Foo")
        assert target.read_text(encoding="utf-8") == "# Foo\n"
        assert written == len("# Foo\n")

    def test_never_adds_second_newline(self, tmp_path: Path):
        target = tmp_path / "README.md"
        gen_file(target, "# Foo\n")
        assert target.read_text(encoding="utf-8") == "# Foo\n"

    def test_keeps_existing_blank_lines(self, tmp_path: Path):
        target = tmp_path / "notes.txt"
        gen_file(target, "a\n\n")
        assert target.read_text(encoding="utf-8") == "a\n\n"

    def test_empty_text_becomes_single_newline(self, tmp_path: Path):
        target = tmp_path / "empty"
        assert gen_file(target, "") == 1
        assert target.read_bytes() == b"\n"

    def test_creates_parent_directories(self, tmp_path: Path):
        target = tmp_path / "a" / "b" / "c" / "runtests.jl"
        gen_file(target, "using Test")
        assert target.is_file()

    def test_overwrites_existing_file(self, tmp_path: Path):
        target = tmp_path / "REQUIRE"
        target.write_text("old contents that are longer\n", encoding="utf-8")
        gen_file(target, "julia 1.1")
        assert target.read_text(encoding="utf-8") == "julia 1.1\n"

    def test_returns_byte_count_for_utf8(self, tmp_path: Path):
        target = tmp_path / "LICENSE"
        written = gen_file(target, "Copyright (c) 2020 Zoë")
        assert written == len("Copyright (c) 2020 Zoë\n".encode("utf-8"))
        assert target.stat().st_size == written

    def test_accepts_string_path(self, tmp_path: Path):
        gen_file(str(tmp_path / "x.jl"), "module X end")
        assert (tmp_path / "x.jl").read_text(encoding="utf-8") == "module X end\n"
