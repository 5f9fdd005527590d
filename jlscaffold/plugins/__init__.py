"""jlscaffold plugins -- optional contributors of files, ignore patterns and badges.

Quick usage::

    from jlscaffold.plugins import CodeCov, GitHubPages, TravisCI

    config = TemplateConfig(
        user="alice",
        julia_version="1.1.0",
        plugins=[TravisCI(), CodeCov(), GitHubPages()],
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jlscaffold.constants import PluginKind
from jlscaffold.plugins.base import (
    Badge,
    GenericPlugin,
    Plugin,
    collect_badges,
    collect_ignore_patterns,
)
from jlscaffold.plugins.ci import AppVeyor, GenericCI, GitLabCI, TravisCI
from jlscaffold.plugins.coverage import CodeCov, Coveralls
from jlscaffold.plugins.documenter import Documenter, GitHubPages

# One concrete class per kind.
PLUGIN_TYPES: dict[PluginKind, type[Plugin]] = {
    PluginKind.DOCUMENTER: Documenter,
    PluginKind.GITHUB_PAGES: GitHubPages,
    PluginKind.TRAVIS_CI: TravisCI,
    PluginKind.APPVEYOR: AppVeyor,
    PluginKind.GITLAB_CI: GitLabCI,
    PluginKind.CODECOV: CodeCov,
    PluginKind.COVERALLS: Coveralls,
    PluginKind.GENERIC_CI: GenericCI,
}


def make_plugin(data: Plugin | Mapping[str, Any], kind: str | None = None) -> Plugin:
    """Build a plugin from a mapping such as one read from a JSON config.

    The variant is chosen by ``data["kind"]``, or by *kind* when the mapping
    has none.  Plugin instances are returned unchanged.

    Raises:
        ValueError: If the kind is missing or unknown.
    """
    if isinstance(data, Plugin):
        return data
    fields = dict(data)
    raw_kind = fields.pop("kind", kind)
    if raw_kind is None:
        raise ValueError(f"Plugin definition has no kind: {fields!r}")
    try:
        plugin_kind = PluginKind(raw_kind)
    except ValueError:
        valid = ", ".join(k.value for k in PluginKind)
        raise ValueError(f"Unknown plugin kind {raw_kind!r} (valid: {valid})") from None
    return PLUGIN_TYPES[plugin_kind].model_validate(fields)


__all__ = [
    "AppVeyor",
    "Badge",
    "CodeCov",
    "Coveralls",
    "Documenter",
    "GenericCI",
    "GenericPlugin",
    "GitHubPages",
    "GitLabCI",
    "PLUGIN_TYPES",
    "Plugin",
    "TravisCI",
    "collect_badges",
    "collect_ignore_patterns",
    "make_plugin",
]
