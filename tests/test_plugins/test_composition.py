"""Unit tests for plugin construction and composition (jlscaffold.plugins).

Tests cover:
- Badge formatting
- make_plugin / PLUGIN_TYPES lookups
- README badge ordering (fixed table, then lexical by kind)
- .gitignore pattern merging and de-duplication
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jlscaffold.constants import BADGE_ORDER, PluginKind
from jlscaffold.plugins import (
    PLUGIN_TYPES,
    AppVeyor,
    Badge,
    CodeCov,
    Coveralls,
    Documenter,
    GenericCI,
    GitHubPages,
    GitLabCI,
    TravisCI,
    collect_badges,
    collect_ignore_patterns,
    make_plugin,
)

pytestmark = pytest.mark.unit


def _index(*plugins):
    return {plugin.kind: plugin for plugin in plugins}


@pytest.fixture
def ci_template(tmp_path: Path) -> Path:
    path = tmp_path / "drone.yml"
    path.write_text("pipeline: {{PKGNAME}}\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Badge
# ---------------------------------------------------------------------------


class TestBadge:
    def test_format_substitutes_user_and_package(self):
        badge = Badge(
            hover="Build Status",
            image="https://ci.example/{{USER}}/{{PKGNAME}}.svg",
            link="https://ci.example/{{USER}}/{{PKGNAME}}",
        )
        assert badge.format("alice", "Foo") == (
            "[![Build Status](https://ci.example/alice/Foo.svg)](https://ci.example/alice/Foo)"
        )

    def test_hover_is_not_substituted(self):
        badge = Badge(hover="{{USER}}", image="i", link="l")
        assert badge.format("alice", "Foo") == "[![{{USER}}](i)](l)"


# ---------------------------------------------------------------------------
# make_plugin
# ---------------------------------------------------------------------------


class TestMakePlugin:
    def test_every_kind_has_a_class(self):
        assert set(PLUGIN_TYPES) == set(PluginKind)
        for kind, plugin_type in PLUGIN_TYPES.items():
            assert plugin_type.model_fields["kind"].default == kind

    def test_builds_from_mapping(self):
        plugin = make_plugin({"kind": "gitlab-ci", "coverage": False})
        assert isinstance(plugin, GitLabCI)
        assert plugin.coverage is False

    def test_kind_argument_used_when_mapping_has_none(self):
        plugin = make_plugin({}, kind=PluginKind.CODECOV)
        assert isinstance(plugin, CodeCov)

    def test_instance_returned_unchanged(self):
        travis = TravisCI()
        assert make_plugin(travis) is travis

    def test_missing_kind_raises(self):
        with pytest.raises(ValueError, match="has no kind"):
            make_plugin({"coverage": True})

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown plugin kind 'jenkins'"):
            make_plugin({"kind": "jenkins"})

    def test_field_errors_surface_as_validation_error(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            make_plugin({"kind": "generic-ci", "config_file": str(tmp_path / "nope.yml"), "dest": ".x.yml"})

    def test_plugins_are_frozen(self):
        plugin = CodeCov()
        with pytest.raises(ValidationError):
            plugin.dest = ".other.yml"


# ---------------------------------------------------------------------------
# collect_badges
# ---------------------------------------------------------------------------


class TestCollectBadges:
    def test_no_plugins_no_badges(self):
        assert collect_badges({}, "alice", "Foo") == []

    def test_table_order_wins_over_mapping_order(self):
        plugins = _index(Coveralls(), CodeCov(), GitLabCI(), AppVeyor(), TravisCI(), GitHubPages())
        lines = collect_badges(plugins, "alice", "Foo")

        expected: list[str] = []
        for kind in BADGE_ORDER:
            expected.extend(plugins[kind].badge_lines("alice", "Foo"))
        assert lines == expected
        assert lines[0].startswith("[![Stable]")
        assert lines[1].startswith("[![Latest]")
        assert lines[-1].startswith("[![Coveralls]")

    def test_plugins_without_badges_contribute_nothing(self):
        plugins = _index(Documenter(), CodeCov())
        assert collect_badges(plugins, "alice", "Foo") == CodeCov().badge_lines("alice", "Foo")

    def test_unlisted_kinds_follow_in_lexical_order(self, ci_template: Path):
        generic = GenericCI(
            config_file=ci_template,
            dest=".drone.yml",
            badges=[Badge(hover="Drone", image="d.svg", link="d")],
        )
        documenter = Documenter(badges=[Badge(hover="Docs", image="x.svg", link="x")])
        plugins = _index(generic, TravisCI(), documenter)

        lines = collect_badges(plugins, "alice", "Foo")

        assert lines[0].startswith("[![Build Status](https://travis-ci.org/alice/Foo.jl")
        # "documenter" sorts before "generic-ci"
        assert lines[1:] == ["[![Docs](x.svg)](x)", "[![Drone](d.svg)](d)"]

    def test_plugin_badges_keep_their_own_order(self):
        lines = collect_badges(_index(GitLabCI()), "alice", "Foo")
        assert [line.split("]")[0] for line in lines] == ["[![Build Status", "[![Coverage"]


# ---------------------------------------------------------------------------
# collect_ignore_patterns
# ---------------------------------------------------------------------------


class TestCollectIgnorePatterns:
    def test_baseline_only(self):
        assert collect_ignore_patterns({}) == [".DS_Store"]

    def test_duplicates_removed_first_position_kept(self):
        plugins = _index(CodeCov(), Documenter(), Coveralls())
        assert collect_ignore_patterns(plugins) == [
            ".DS_Store",
            "*.jl.cov",
            "*.jl.*.cov",
            "*.jl.mem",
            "/docs/build/",
            "/docs/site/",
        ]

    def test_follows_mapping_order(self):
        plugins = _index(Documenter(), CodeCov())
        assert collect_ignore_patterns(plugins) == [
            ".DS_Store",
            "/docs/build/",
            "/docs/site/",
            "*.jl.cov",
            "*.jl.*.cov",
            "*.jl.mem",
        ]

    def test_baseline_pattern_not_repeated(self):
        plugins = _index(Documenter(gitignore=[".DS_Store", "/docs/build/", "/docs/build/"]))
        assert collect_ignore_patterns(plugins) == [".DS_Store", "/docs/build/"]

    def test_gitlab_coverage_patterns(self):
        with_coverage = collect_ignore_patterns(_index(GitLabCI()))
        without = collect_ignore_patterns(_index(GitLabCI(coverage=False)))
        assert "*.jl.mem" in with_coverage
        assert without == [".DS_Store"]

    def test_no_duplicates_for_any_combination(self):
        plugins = _index(GitLabCI(), CodeCov(), Coveralls(), GitHubPages(), TravisCI())
        patterns = collect_ignore_patterns(plugins)
        assert len(patterns) == len(set(patterns))
