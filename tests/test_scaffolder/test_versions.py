"""Unit tests for version parsing and the REQUIRE floor (jlscaffold.scaffolder.versions)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from jlscaffold.scaffolder.versions import JuliaVersion, version_floor

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# JuliaVersion.parse
# ---------------------------------------------------------------------------


class TestParse:
    def test_full_version(self):
        v = JuliaVersion.parse("1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.prerelease == ()

    def test_patch_defaults_to_zero(self):
        v = JuliaVersion.parse("0.7")
        assert (v.major, v.minor, v.patch) == (0, 7, 0)

    def test_leading_v_is_accepted(self):
        assert JuliaVersion.parse("v1.0.1") == JuliaVersion(major=1, minor=0, patch=1)

    def test_prerelease_is_split_on_dots(self):
        v = JuliaVersion.parse("1.3.0-rc.2")
        assert v.prerelease == ("rc", "2")

    def test_build_metadata_is_ignored(self):
        assert JuliaVersion.parse("1.2.3+build.5") == JuliaVersion.parse("1.2.3")

    def test_surrounding_whitespace_is_ignored(self):
        assert JuliaVersion.parse("  1.1.0\n") == JuliaVersion(major=1, minor=1)

    @pytest.mark.parametrize("text", ["", "1", "one.two", "1.2.3.4", "1.2-", "latest"])
    def test_malformed_raises(self, text: str):
        with pytest.raises(ValueError, match="Invalid version number"):
            JuliaVersion.parse(text)

    def test_str_round_trips_prerelease(self):
        assert str(JuliaVersion.parse("1.3.0-beta")) == "1.3.0-beta"
        assert str(JuliaVersion.parse("1.1")) == "1.1.0"

    def test_model_is_frozen(self):
        v = JuliaVersion.parse("1.1.0")
        with pytest.raises(ValidationError):
            v.major = 2

    def test_negative_components_rejected(self):
        with pytest.raises(ValidationError):
            JuliaVersion(major=-1, minor=0)


# ---------------------------------------------------------------------------
# version_floor
# ---------------------------------------------------------------------------


class TestVersionFloor:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.2.0", "1.2"),
            ("1.2.3", "1.2"),
            ("1.3.0-beta", "1.3-"),
            ("1.3.1-beta", "1.3"),
            ("0.7.0-alpha", "0.7-"),
            ("0.6.4", "0.6"),
        ],
    )
    def test_floor(self, text: str, expected: str):
        assert version_floor(JuliaVersion.parse(text)) == expected
