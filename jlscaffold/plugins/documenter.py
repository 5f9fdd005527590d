"""Documentation plugins built on Documenter.jl."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator

from jlscaffold.constants import PluginKind
from jlscaffold.plugins.base import Badge, Plugin
from jlscaffold.scaffolder.files import gen_file
from jlscaffold.scaffolder.templates import substitute

if TYPE_CHECKING:
    from jlscaffold.config import TemplateConfig

MAKE_JL = """\
using Documenter, {{PKGNAME}}

makedocs(;
    modules=[{{PKGNAME}}],
    format=:html,
    pages=[
        "Home" => "index.md",
    ],
    repo="https://{{HOST}}/{{USER}}/{{PKGNAME}}.jl/blob/{commit}{path}#L{line}",
    sitename="{{PKGNAME}}.jl",
    authors="{{AUTHORS}}",
    assets={{ASSETS}},
){{#DEPLOY}}

deploydocs(;
    repo="{{HOST}}/{{USER}}/{{PKGNAME}}.jl",
    target="build",
    julia="{{VERSION}}",
    deps=nothing,
    make=nothing,
){{/DEPLOY}}
"""


class Documenter(Plugin):
    """Sets up ``docs/`` for Documenter.jl.

    Writes ``docs/make.jl`` and ``docs/src/index.md`` (a copy of the
    generated README when one exists) and copies ``assets`` into
    ``docs/src/assets/``.
    """

    kind: Literal[PluginKind.DOCUMENTER] = PluginKind.DOCUMENTER
    assets: list[Path] = Field(default_factory=list)
    gitignore: list[str] = Field(default_factory=lambda: ["/docs/build/", "/docs/site/"])

    @field_validator("assets")
    @classmethod
    def _assets_exist(cls, value: list[Path]) -> list[Path]:
        for asset in value:
            if not asset.is_file():
                raise ValueError(f"Asset file {asset} does not exist")
        return value

    def deploy(self, config: TemplateConfig) -> bool:
        """Whether ``make.jl`` should also publish the built docs."""
        return False

    def gen_files(self, pkg_name: str, config: TemplateConfig) -> list[str]:
        pkg_dir = config.staging_dir(pkg_name)
        docs_src = pkg_dir / "docs" / "src"
        docs_src.mkdir(parents=True, exist_ok=True)

        if self.assets:
            (docs_src / "assets").mkdir(exist_ok=True)
            for asset in self.assets:
                shutil.copyfile(asset, docs_src / "assets" / asset.name)

        view = {
            "PKGNAME": pkg_name,
            "HOST": config.host,
            "AUTHORS": config.authors,
            "ASSETS": self._assets_literal(),
            "DEPLOY": self.deploy(config),
        }
        gen_file(pkg_dir / "docs" / "make.jl", substitute(MAKE_JL, config, view))

        readme = pkg_dir / "README.md"
        if readme.is_file():
            shutil.copyfile(readme, docs_src / "index.md")
        else:
            gen_file(docs_src / "index.md", f"# {pkg_name}")

        return ["docs/"]

    def _assets_literal(self) -> str:
        # A Julia vector literal, one asset per line.
        if not self.assets:
            return "[]"
        lines = ["["]
        lines.extend(f'        "assets/{asset.name}",' for asset in self.assets)
        lines.append("    ]")
        return "\n".join(lines)


class GitHubPages(Documenter):
    """Documenter docs published to GitHub Pages.

    Adds stable/latest documentation badges, and a ``deploydocs`` call when
    Travis CI is configured to run it.  The generator also creates the empty
    ``gh-pages`` branch for this plugin.
    """

    kind: Literal[PluginKind.GITHUB_PAGES] = PluginKind.GITHUB_PAGES
    badges: list[Badge] = Field(
        default_factory=lambda: [
            Badge(
                hover="Stable",
                image="https://img.shields.io/badge/docs-stable-blue.svg",
                link="https://{{USER}}.github.io/{{PKGNAME}}.jl/stable",
            ),
            Badge(
                hover="Latest",
                image="https://img.shields.io/badge/docs-latest-blue.svg",
                link="https://{{USER}}.github.io/{{PKGNAME}}.jl/latest",
            ),
        ]
    )

    def deploy(self, config: TemplateConfig) -> bool:
        return config.has_plugin(PluginKind.TRAVIS_CI)
