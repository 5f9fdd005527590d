"""Code coverage reporting plugins.

Neither service needs a config file by default; pass ``config_file`` to ship
one (it is rendered like any other plugin template).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from jlscaffold.constants import PluginKind
from jlscaffold.plugins.base import COVERAGE_PATTERNS, Badge, GenericPlugin


class CodeCov(GenericPlugin):
    """Codecov.io coverage reports."""

    kind: Literal[PluginKind.CODECOV] = PluginKind.CODECOV
    dest: str = ".codecov.yml"
    gitignore: list[str] = Field(default_factory=lambda: list(COVERAGE_PATTERNS))
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="CodeCov",
                image="https://codecov.io/gh/{{USER}}/{{PKGNAME}}.jl/branch/master/graph/badge.svg",
                link="https://codecov.io/gh/{{USER}}/{{PKGNAME}}.jl",
            ),
        ]
    )


class Coveralls(GenericPlugin):
    """Coveralls.io coverage reports."""

    kind: Literal[PluginKind.COVERALLS] = PluginKind.COVERALLS
    dest: str = ".coveralls.yml"
    gitignore: list[str] = Field(default_factory=lambda: list(COVERAGE_PATTERNS))
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="Coveralls",
                image="https://coveralls.io/repos/github/{{USER}}/{{PKGNAME}}.jl/badge.svg?branch=master",
                link="https://coveralls.io/github/{{USER}}/{{PKGNAME}}.jl?branch=master",
            ),
        ]
    )
