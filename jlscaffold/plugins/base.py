"""Plugin base classes and the rules for composing several plugins.

A plugin contributes three things to a generated package, independently of
every other plugin:

* files (``gen_files``), written into the staging directory;
* ``.gitignore`` patterns (``ignore_patterns``), in the plugin's own order;
* README badges (``badge_lines``), in the plugin's own order.

:func:`collect_badges` and :func:`collect_ignore_patterns` merge those
contributions deterministically.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jlscaffold.constants import BADGE_ORDER, BASELINE_IGNORE, PluginKind
from jlscaffold.scaffolder.files import gen_file
from jlscaffold.scaffolder.templates import render, substitute

if TYPE_CHECKING:
    from jlscaffold.config import TemplateConfig

DEFAULTS_DIR = Path(__file__).parent / "defaults"

# Files written by Julia's coverage tooling.
COVERAGE_PATTERNS: list[str] = ["*.jl.cov", "*.jl.*.cov", "*.jl.mem"]


class Badge(BaseModel):
    """A README status badge.

    ``image`` and ``link`` may contain ``{{USER}}`` and ``{{PKGNAME}}``.
    """

    model_config = ConfigDict(frozen=True)

    hover: str
    image: str
    link: str

    def format(self, user: str, pkg_name: str) -> str:
        """Return the badge as a markdown snippet for *user*/*pkg_name*."""
        view = {"USER": user, "PKGNAME": pkg_name}
        image = render(self.image, view)
        link = render(self.link, view)
        return f"[![{self.hover}]({image})]({link})"


class Plugin(BaseModel):
    """Base class of every plugin variant.

    Subclasses narrow ``kind`` to a single :class:`PluginKind` literal;
    :data:`jlscaffold.plugins.PLUGIN_TYPES` maps each kind back to its class.
    """

    model_config = ConfigDict(frozen=True)

    kind: PluginKind
    gitignore: list[str] = Field(default_factory=list)
    badges: list[Badge] = Field(default_factory=list)

    def ignore_patterns(self) -> list[str]:
        return list(self.gitignore)

    def badge_lines(self, user: str, pkg_name: str) -> list[str]:
        return [badge.format(user, pkg_name) for badge in self.badges]

    def gen_files(self, pkg_name: str, config: TemplateConfig) -> list[str]:
        """Write this plugin's files for *pkg_name*.

        Returns:
            Paths of the written files/directories, relative to the package
            root.
        """
        return []


class GenericPlugin(Plugin):
    """A plugin that renders one config file template into the package.

    ``config_file`` is rendered with :func:`substitute` (plus ``PKGNAME`` and
    ``view``) and written to ``dest``.  With no ``config_file`` the plugin
    contributes only badges and ignore patterns.
    """

    config_file: Path | None = None
    dest: str = ""
    view: dict[str, Any] = Field(default_factory=dict)

    @field_validator("config_file")
    @classmethod
    def _config_file_exists(cls, value: Path | None) -> Path | None:
        if value is not None and not value.is_file():
            raise ValueError(f"File {value} does not exist")
        return value

    @model_validator(mode="after")
    def _dest_required(self) -> "GenericPlugin":
        if self.config_file is not None and not self.dest:
            raise ValueError("dest is required when config_file is set")
        return self

    def template_view(self) -> dict[str, Any]:
        """Extra keys made available to ``config_file``."""
        return dict(self.view)

    def gen_files(self, pkg_name: str, config: TemplateConfig) -> list[str]:
        if self.config_file is None:
            return []
        template = self.config_file.read_text(encoding="utf-8")
        text = substitute(
            template, config, {"PKGNAME": pkg_name, **self.template_view()}
        )
        gen_file(config.staging_dir(pkg_name) / self.dest, text)
        return [self.dest]


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def collect_badges(
    plugins: Mapping[PluginKind, Plugin], user: str, pkg_name: str
) -> list[str]:
    """Return every configured plugin's badges in README order.

    Kinds listed in :data:`BADGE_ORDER` come first, in table order.  Any
    other kind follows, sorted by its value.
    """
    lines: list[str] = []
    for kind in BADGE_ORDER:
        if kind in plugins:
            lines.extend(plugins[kind].badge_lines(user, pkg_name))

    remaining = sorted(
        (kind for kind in plugins if kind not in BADGE_ORDER),
        key=lambda kind: kind.value,
    )
    for kind in remaining:
        lines.extend(plugins[kind].badge_lines(user, pkg_name))
    return lines


def collect_ignore_patterns(plugins: Mapping[PluginKind, Plugin]) -> list[str]:
    """Return the ``.gitignore`` lines: the baseline pattern, then each plugin's.

    Duplicates are dropped; the first occurrence keeps its position.
    """
    patterns = [BASELINE_IGNORE]
    for plugin in plugins.values():
        patterns.extend(plugin.ignore_patterns())
    return list(dict.fromkeys(patterns))
