"""jlscaffold package generator.

Builds a complete Julia package repository from a :class:`TemplateConfig`:

1. Initialise a git repository in a scratch directory and make an empty
   initial commit (plus an empty ``gh-pages`` branch for GitHub Pages).
2. Write the package files: entrypoint, tests, ``REQUIRE``, README,
   ``.gitignore``, ``LICENSE`` and every plugin's files.
3. Commit everything, then move the finished package into ``dest_dir``.

Nothing under ``dest_dir`` is touched until the final move, so a failed run
leaves the destination exactly as it was.  Scratch leftovers of a failed run
are kept for inspection.

Usage::

    jlscaffold Foo --user alice --julia-version 1.1.0
    python -m jlscaffold.generate Foo --config template.json --force --ssh
"""

from __future__ import annotations

import re
import shutil
import sys
import tempfile
from pathlib import Path

from rich.markup import escape

from jlscaffold.builder import Repository, RepositoryError
from jlscaffold.config import TemplateConfig
from jlscaffold.constants import (
    EXTENSION,
    FILES_COMMIT_MESSAGE,
    INITIAL_COMMIT_MESSAGE,
    LANGUAGE,
    PAGES_BRANCH,
    PRIMARY_BRANCH,
    PluginKind,
)
from jlscaffold.licenses import LicenseStore, UnknownLicenseError, print_licenses
from jlscaffold.plugins import collect_badges, collect_ignore_patterns
from jlscaffold.scaffolder import gen_file, substitute, version_floor
from jlscaffold.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PathExistsError(FileExistsError):
    """Raised when the destination already exists and ``force`` is off."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Path '{path}' already exists, use force=True to overwrite it.")


# ---------------------------------------------------------------------------
# Package names and remotes
# ---------------------------------------------------------------------------

_IDENTIFIER_PATTERN = re.compile(r"^[^\W\d]\w*!*$")

_JULIA_KEYWORDS = frozenset(
    {
        "baremodule", "begin", "break", "catch", "const", "continue", "do",
        "else", "elseif", "end", "export", "false", "finally", "for",
        "function", "global", "if", "import", "let", "local", "macro",
        "module", "quote", "return", "struct", "true", "try", "using", "while",
    }
)


def normalize_pkg_name(pkg_name: str) -> str:
    """Strip a trailing ``.jl`` and check the rest is a valid module name.

    Raises:
        ValueError: If the name is not a Julia identifier.
    """
    name = pkg_name[: -len(EXTENSION)] if pkg_name.endswith(EXTENSION) else pkg_name
    if not _IDENTIFIER_PATTERN.match(name) or name in _JULIA_KEYWORDS:
        raise ValueError(f"{pkg_name!r} is not a valid Julia package name")
    return name


def remote_url(pkg_name: str, config: TemplateConfig, ssh: bool = False) -> str:
    """Return the ``origin`` URL for *pkg_name*.

    Only the SSH form carries the ``.git`` suffix.
    """
    if ssh:
        return f"{config.ssh_user}@{config.host}:{config.user}/{pkg_name}{EXTENSION}.git"
    return f"https://{config.host}/{config.user}/{pkg_name}{EXTENSION}"


# ---------------------------------------------------------------------------
# Content generators
#
# Each writes into config.staging_dir(pkg_name) and returns the paths it
# produced, relative to the package root, for staging.
# ---------------------------------------------------------------------------

ENTRYPOINT_JL = """\
module {{PKGNAME}}

# Package code goes here.

end"""

RUNTESTS_JL = """\
using {{PKGNAME}}
{{#STDLIB_TEST}}using Test{{/STDLIB_TEST}}{{^STDLIB_TEST}}using Base.Test{{/STDLIB_TEST}}

# Write your own tests here.
@test 1 == 2"""


def gen_entrypoint(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Write ``src/<pkg>.jl`` holding an empty module."""
    text = substitute(ENTRYPOINT_JL, config, {"PKGNAME": pkg_name})
    gen_file(config.staging_dir(pkg_name) / "src" / f"{pkg_name}{EXTENSION}", text)
    return ["src/"]


def gen_tests(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Write ``test/runtests.jl``.

    Julia 0.7 moved ``Test`` out of ``Base``; older targets get ``Base.Test``.
    """
    v = config.julia_version
    view = {"PKGNAME": pkg_name, "STDLIB_TEST": (v.major, v.minor) >= (0, 7)}
    text = substitute(RUNTESTS_JL, config, view)
    gen_file(config.staging_dir(pkg_name) / "test" / "runtests.jl", text)
    return ["test/"]


def gen_require(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Write ``REQUIRE``: the Julia version floor, then one requirement per line."""
    lines = [f"{LANGUAGE} {version_floor(config.julia_version)}", *config.requirements]
    gen_file(config.staging_dir(pkg_name) / "REQUIRE", "\n".join(lines))
    return ["REQUIRE"]


def gen_readme(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Write ``README.md``: a title, then every plugin's badges."""
    text = f"# {pkg_name}\n"
    badges = collect_badges(config.plugins, config.user, pkg_name)
    if badges:
        text += "\n" + "\n".join(badges)
    gen_file(config.staging_dir(pkg_name) / "README.md", text)
    return ["README.md"]


def gen_gitignore(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Write ``.gitignore`` from the baseline and plugin patterns."""
    patterns = collect_ignore_patterns(config.plugins)
    gen_file(config.staging_dir(pkg_name) / ".gitignore", "\n".join(patterns))
    return [".gitignore"]


def gen_license(
    pkg_name: str, config: TemplateConfig, licenses: LicenseStore | None = None
) -> list[str]:
    """Write ``LICENSE`` (copyright line plus body); nothing without a license.

    Raises:
        UnknownLicenseError: If the configured license is not in *licenses*.
    """
    if config.license is None:
        return []
    store = licenses or LicenseStore()
    text = f"Copyright (c) {config.years} {config.authors}\n"
    text += store.read_body(config.license)
    gen_file(config.staging_dir(pkg_name) / "LICENSE", text)
    return ["LICENSE"]


def gen_plugin_files(pkg_name: str, config: TemplateConfig) -> list[str]:
    """Run every plugin's file hook, in plugin mapping order."""
    files: list[str] = []
    for plugin in config.plugins.values():
        files.extend(plugin.gen_files(pkg_name, config))
    return files


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def _move_into_place(source: Path, destination: Path) -> None:
    """Move *source* to *destination*, replacing whatever is there.

    An existing destination is set aside first and put back if the move
    fails.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)

    backup: Path | None = None
    if destination.exists() or destination.is_symlink():
        backup = destination.with_name(f".{destination.name}.jlscaffold-old")
        if backup.is_dir() and not backup.is_symlink():
            shutil.rmtree(backup)
        elif backup.exists() or backup.is_symlink():
            backup.unlink()
        destination.rename(backup)

    try:
        shutil.move(str(source), str(destination))
    except OSError:
        if backup is not None:
            if destination.is_dir() and not destination.is_symlink():
                shutil.rmtree(destination, ignore_errors=True)
            backup.rename(destination)
        raise

    if backup is not None:
        if backup.is_dir() and not backup.is_symlink():
            shutil.rmtree(backup)
        else:
            backup.unlink()


def _check_scratch_placement(scratch_dir: Path, dest_dir: Path, destination: Path) -> None:
    """Reject a scratch directory that overlaps the output.

    The scratch root is deleted after the move, and the package is built
    there so the destination stays untouched until then.
    """
    scratch = scratch_dir.resolve()
    if dest_dir.resolve().is_relative_to(scratch):
        raise ValueError(
            f"Destination {str(dest_dir)!r} is inside scratch directory {str(scratch_dir)!r}"
        )
    if scratch.is_relative_to(destination.resolve()):
        raise ValueError(
            f"Scratch directory {str(scratch_dir)!r} is inside destination {str(destination)!r}"
        )


def generate(
    pkg_name: str,
    config: TemplateConfig,
    force: bool = False,
    ssh: bool = False,
    licenses: LicenseStore | None = None,
) -> Path:
    """Generate package *pkg_name* from *config*.

    Args:
        pkg_name: Package name, with or without a trailing ``.jl``.
        config: The template configuration.
        force: Replace an existing package at the destination.
        ssh: Use the SSH form of the ``origin`` remote instead of HTTPS.
        licenses: License store to read the license body from.

    Returns:
        The path of the generated package.

    Raises:
        ValueError: If *pkg_name* is not a valid package name, or the scratch
            directory overlaps the destination.
        UnknownLicenseError: If the configured license is unknown.
        PathExistsError: If the destination exists and *force* is off.
        RepositoryError: If a git command fails.
        TemplateRenderError: If a plugin template is malformed.
        OSError: If a file cannot be written or moved.
    """
    pkg_name = normalize_pkg_name(pkg_name)
    store = licenses or LicenseStore()

    if config.license is not None and config.license not in store:
        raise UnknownLicenseError(config.license, store.identifiers())

    destination = config.destination(pkg_name)
    if not force and (destination.exists() or destination.is_symlink()):
        raise PathExistsError(destination)

    if config.scratch_dir is None:
        scratch = Path(tempfile.mkdtemp(prefix="jlscaffold-"))
        config = config.model_copy(update={"scratch_dir": scratch})
    _check_scratch_placement(config.scratch_dir, config.dest_dir, destination)
    staging = config.staging_dir(pkg_name)
    if staging.exists():
        console.print(f"[dim]Removing leftovers of a previous run at {escape(str(staging))}[/dim]")
        shutil.rmtree(staging)

    # -- Repository ----------------------------------------------------------
    repo = Repository.init(staging, primary_branch=PRIMARY_BRANCH)
    console.print(f"[cyan]Initialized git repo at[/cyan] {escape(str(staging))}")
    if config.git_config:
        console.print("[cyan]Applying git configuration[/cyan]")
    for key, value in config.git_config.items():
        repo.set_config(key, value)
    repo.commit(INITIAL_COMMIT_MESSAGE, allow_empty=True)
    console.print("[cyan]Made initial empty commit[/cyan]")

    url = remote_url(pkg_name, config, ssh=ssh)
    repo.set_remote(url)
    console.print(f"[cyan]Set remote origin to[/cyan] {escape(url)}")

    if config.has_plugin(PluginKind.GITHUB_PAGES):
        repo.create_branch(PAGES_BRANCH)
        repo.commit(INITIAL_COMMIT_MESSAGE, allow_empty=True)
        console.print(f"[cyan]Created empty {PAGES_BRANCH} branch[/cyan]")
        repo.checkout_branch(PRIMARY_BRANCH)

    # -- Files ---------------------------------------------------------------
    files = [
        *gen_entrypoint(pkg_name, config),
        *gen_tests(pkg_name, config),
        *gen_require(pkg_name, config),
        *gen_readme(pkg_name, config),
        *gen_gitignore(pkg_name, config),
        *gen_license(pkg_name, config, store),
        *gen_plugin_files(pkg_name, config),
    ]

    repo.stage(files)
    console.print(f"[cyan]Staged {len(files)} files/directories:[/cyan] {escape(', '.join(files))}")
    repo.commit(FILES_COMMIT_MESSAGE)
    console.print("[cyan]Committed files generated by jlscaffold[/cyan]")
    multiple_branches = len(repo.list_branches()) > 1

    # -- Move into place -----------------------------------------------------
    console.print(f"[cyan]Moving temporary package directory into[/cyan] {escape(str(config.dest_dir))}/")
    _move_into_place(staging, destination)
    shutil.rmtree(config.scratch_dir)

    print_summary_table(
        {
            "Package": f"{pkg_name}{EXTENSION}",
            "Destination": str(destination),
            "Remote": url,
            "Plugins": ", ".join(kind.value for kind in config.plugins) or "(none)",
            "Files": ", ".join(files),
        },
        title="Generated package",
    )
    print_success(f"Generated {pkg_name}{EXTENSION} at {destination}")
    if multiple_branches:
        print_warning("Remember to push all created branches to your remote: git push --all")
    return destination


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``jlscaffold`` / ``python -m jlscaffold.generate``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="jlscaffold -- generate a Julia package repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  jlscaffold Foo --user alice --julia-version 1.1.0\n"
            "  jlscaffold Foo.jl --config template.json --force --ssh\n"
            "  jlscaffold --list-licenses\n"
        ),
    )

    parser.add_argument(
        "pkg_name",
        nargs="?",
        help="Package name, with or without the .jl suffix",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON template configuration (as written by TemplateConfig.save)",
    )
    parser.add_argument("--user", default=None, help="Account name on the remote host")
    parser.add_argument("--julia-version", default=None, help="Minimum Julia version, e.g. 1.1.0")
    parser.add_argument("--dir", default=None, help="Destination directory (default: cwd)")
    parser.add_argument("--host", default=None, help="Remote host (default: github.com)")
    parser.add_argument("--license", default=None, help="License identifier (default: MIT)")
    parser.add_argument("--authors", default=None, help="Copyright holders")
    parser.add_argument(
        "--force", action="store_true",
        help="Replace an existing package at the destination",
    )
    parser.add_argument(
        "--ssh", action="store_true",
        help="Use an SSH remote URL instead of HTTPS",
    )
    parser.add_argument(
        "--list-licenses", action="store_true",
        help="Show the available licenses and exit",
    )

    args = parser.parse_args(argv)

    if args.list_licenses:
        print_licenses()
        return

    if not args.pkg_name:
        parser.error("the following arguments are required: pkg_name")

    overrides = {
        key: value
        for key, value in (
            ("user", args.user),
            ("julia_version", args.julia_version),
            ("dest_dir", args.dir),
            ("host", args.host),
            ("license", args.license),
            ("authors", args.authors),
        )
        if value is not None
    }

    try:
        if args.config:
            loaded = TemplateConfig.load(Path(args.config))
            config = TemplateConfig.model_validate({**loaded.model_dump(), **overrides})
        else:
            config = TemplateConfig.from_env(**overrides)
        generate(args.pkg_name, config, force=args.force, ssh=args.ssh)
    except (ValueError, OSError, RepositoryError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
