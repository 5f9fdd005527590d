"""Unit tests for the console helpers (jlscaffold.utils)."""

from __future__ import annotations

import pytest

from jlscaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

pytestmark = pytest.mark.unit


class TestRichHelpers:
    def test_print_success(self):
        with console.capture() as capture:
            print_success("Generated Foo.jl")
        assert "Generated Foo.jl" in capture.get()

    def test_print_error(self):
        with console.capture() as capture:
            print_error("Something failed")
        assert "Something failed" in capture.get()

    def test_print_warning(self):
        with console.capture() as capture:
            print_warning("Remember to push")
        assert "Remember to push" in capture.get()

    def test_print_summary_table(self):
        with console.capture() as capture:
            print_summary_table({"Package": "Foo.jl", "Files": 7}, title="Generated package")
        output = capture.get()
        assert "Generated package" in output
        assert "Foo.jl" in output
        assert "7" in output

    def test_messages_are_not_parsed_as_markup(self):
        with console.capture() as capture:
            print_error("Error: [type=value_error, input_value='x']")
        assert "[type=value_error, input_value='x']" in capture.get()
