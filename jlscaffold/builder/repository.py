"""Thin wrapper over the ``git`` command line for building a new repository.

Every operation runs one ``git`` subprocess in the repository directory and
raises :class:`RepositoryError` when it fails.  There are no timeouts and no
retries: a generation run either builds the whole history or stops at the
first failing command.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from pathlib import Path

from jlscaffold.constants import PRIMARY_BRANCH, REMOTE_NAME


class RepositoryError(Exception):
    """Raised when a git command fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


def _run_git(*args: str, cwd: str | Path | None = None) -> tuple[str, str]:
    """Run a git command and return (stdout, stderr).

    Raises RepositoryError if git is missing or the command exits non-zero.
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise RepositoryError(
            "git executable not found; install git and make sure it is on PATH",
            command=cmd_str,
        ) from exc

    stdout = process.stdout.decode("utf-8", errors="replace").strip()
    stderr = process.stderr.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise RepositoryError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class Repository:
    """A git repository on disk, driven through the ``git`` CLI.

    Use :meth:`init` to create a new repository; the constructor only opens
    an existing one.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).resolve()

        if not (self.path / ".git").exists():
            raise RepositoryError(f"Not a git repository: {self.path}")

    @classmethod
    def init(cls, path: str | Path, primary_branch: str = PRIMARY_BRANCH) -> "Repository":
        """Create *path* (and parents) and initialise an empty repository there.

        HEAD points at *primary_branch* regardless of git's ``init.defaultBranch``.
        """
        target = Path(path)
        target.mkdir(parents=True, exist_ok=True)
        _run_git("init", "--quiet", cwd=target)
        _run_git("symbolic-ref", "HEAD", f"refs/heads/{primary_branch}", cwd=target)
        return cls(target)

    def _git(self, *args: str) -> str:
        stdout, _ = _run_git(*args, cwd=self.path)
        return stdout

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_config(self, key: str, value: str | int | bool) -> None:
        """Set a repository-local git config value (booleans as ``true``/``false``)."""
        if isinstance(value, bool):
            text = "true" if value else "false"
        else:
            text = str(value)
        self._git("config", key, text)

    def set_remote(self, url: str, name: str = REMOTE_NAME) -> None:
        self._git("remote", "add", name, url)

    def remote_url(self, name: str = REMOTE_NAME) -> str:
        return self._git("remote", "get-url", name)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def stage(self, paths: Iterable[str | Path]) -> None:
        """Add *paths* (files or directories, relative to the repo) to the index."""
        items = [str(p) for p in paths]
        if items:
            self._git("add", "--", *items)

    def commit(self, message: str, allow_empty: bool = False) -> None:
        args = ["commit", "--quiet", "-m", message]
        if allow_empty:
            args.append("--allow-empty")
        self._git(*args)

    def commit_count(self, ref: str = "HEAD") -> int:
        return int(self._git("rev-list", "--count", ref))

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def create_branch(self, name: str) -> None:
        """Create *name* at HEAD and check it out."""
        self._git("checkout", "--quiet", "-b", name)

    def checkout_branch(self, name: str) -> None:
        self._git("checkout", "--quiet", name)

    def current_branch(self) -> str:
        return self._git("symbolic-ref", "--short", "HEAD")

    def list_branches(self) -> list[str]:
        """Return local branch names, sorted by git."""
        stdout = self._git("for-each-ref", "--format=%(refname:short)", "refs/heads/")
        return [line.strip() for line in stdout.splitlines() if line.strip()]
