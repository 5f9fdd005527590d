"""Fixed names and tables shared by the generator, the plugins and the config."""

from enum import Enum


class PluginKind(str, Enum):
    """Every plugin variant the generator knows how to compose."""

    DOCUMENTER = "documenter"
    GITHUB_PAGES = "github-pages"
    TRAVIS_CI = "travis-ci"
    APPVEYOR = "appveyor"
    GITLAB_CI = "gitlab-ci"
    CODECOV = "codecov"
    COVERALLS = "coveralls"
    GENERIC_CI = "generic-ci"


# Plugins that build documentation (drive the DOCUMENTER template flag).
DOCUMENTER_KINDS: frozenset[PluginKind] = frozenset(
    {PluginKind.DOCUMENTER, PluginKind.GITHUB_PAGES}
)

# README badge placement priority.  Kinds not listed here are appended
# afterwards in lexical order of their value.
BADGE_ORDER: tuple[PluginKind, ...] = (
    PluginKind.GITHUB_PAGES,
    PluginKind.TRAVIS_CI,
    PluginKind.APPVEYOR,
    PluginKind.GITLAB_CI,
    PluginKind.CODECOV,
    PluginKind.COVERALLS,
)

# ---------------------------------------------------------------------------
# Generated package
# ---------------------------------------------------------------------------

LANGUAGE = "julia"
EXTENSION = ".jl"
BASELINE_IGNORE = ".DS_Store"

# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

PRIMARY_BRANCH = "master"
PAGES_BRANCH = "gh-pages"
REMOTE_NAME = "origin"
INITIAL_COMMIT_MESSAGE = "Empty initial commit"
FILES_COMMIT_MESSAGE = "Files generated by jlscaffold"
