"""Continuous integration plugins."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import Field

from jlscaffold.constants import PluginKind
from jlscaffold.plugins.base import COVERAGE_PATTERNS, DEFAULTS_DIR, Badge, GenericPlugin


class TravisCI(GenericPlugin):
    """Travis CI: ``.travis.yml`` and a build status badge."""

    kind: Literal[PluginKind.TRAVIS_CI] = PluginKind.TRAVIS_CI
    config_file: Path | None = DEFAULTS_DIR / "travis.yml"
    dest: str = ".travis.yml"
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="Build Status",
                image="https://travis-ci.org/{{USER}}/{{PKGNAME}}.jl.svg?branch=master",
                link="https://travis-ci.org/{{USER}}/{{PKGNAME}}.jl",
            ),
        ]
    )


class AppVeyor(GenericPlugin):
    """AppVeyor (Windows CI): ``.appveyor.yml`` and a build status badge."""

    kind: Literal[PluginKind.APPVEYOR] = PluginKind.APPVEYOR
    config_file: Path | None = DEFAULTS_DIR / "appveyor.yml"
    dest: str = ".appveyor.yml"
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="Build Status",
                image="https://ci.appveyor.com/api/projects/status/github/{{USER}}/{{PKGNAME}}.jl?svg=true",
                link="https://ci.appveyor.com/project/{{USER}}/{{PKGNAME}}-jl",
            ),
        ]
    )


class GitLabCI(GenericPlugin):
    """GitLab CI: ``.gitlab-ci.yml``, a build badge and optional coverage.

    With ``coverage`` enabled the pipeline reports test coverage, coverage
    artefacts are ignored and a coverage badge is added.
    """

    kind: Literal[PluginKind.GITLAB_CI] = PluginKind.GITLAB_CI
    config_file: Path | None = DEFAULTS_DIR / "gitlab-ci.yml"
    dest: str = ".gitlab-ci.yml"
    coverage: bool = True
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="Build Status",
                image="https://gitlab.com/{{USER}}/{{PKGNAME}}.jl/badges/master/build.svg",
                link="https://gitlab.com/{{USER}}/{{PKGNAME}}.jl/pipelines",
            ),
        ]
    )

    def ignore_patterns(self) -> list[str]:
        if self.coverage:
            return [*self.gitignore, *COVERAGE_PATTERNS]
        return list(self.gitignore)

    def badge_lines(self, user: str, pkg_name: str) -> list[str]:
        lines = super().badge_lines(user, pkg_name)
        if self.coverage:
            coverage_badge = Badge(
                hover="Coverage",
                image="https://gitlab.com/{{USER}}/{{PKGNAME}}.jl/badges/master/coverage.svg",
                link="https://gitlab.com/{{USER}}/{{PKGNAME}}.jl/commits/master",
            )
            lines.append(coverage_badge.format(user, pkg_name))
        return lines

    def template_view(self) -> dict[str, Any]:
        return {**self.view, "GITLABCOVERAGE": self.coverage}


class GenericCI(GenericPlugin):
    """Any other CI service, described entirely by the caller.

    Example::

        GenericCI(
            config_file=Path("drone.yml"),
            dest=".drone.yml",
            badges=[Badge(hover="Build", image="...", link="...")],
        )
    """

    kind: Literal[PluginKind.GENERIC_CI] = PluginKind.GENERIC_CI
    config_file: Path
    dest: str
