"""Shared pytest fixtures for the jlscaffold test suite.

Provides reusable fixtures for:
- Template configurations rooted in a temporary directory
- A git identity for commits made by tests
- A real git repository to run builder tests against
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, Callable

import pytest

from jlscaffold.config import TemplateConfig


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------

@pytest.fixture
def git_identity() -> dict[str, str | bool]:
    """Repository-local git settings so commits work in any environment."""
    return {
        "user.name": "jlscaffold Test",
        "user.email": "test@jlscaffold.local",
        "commit.gpgsign": False,
    }


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Temporary git repository with an identity but no commits."""
    repo_dir = tmp_path / "test-repo"
    repo_dir.mkdir()
    subprocess.run(["git", "init"], cwd=repo_dir, check=True, capture_output=True)
    subprocess.run(
        ["git", "config", "user.email", "test@jlscaffold.local"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "jlscaffold Test"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    subprocess.run(
        ["git", "config", "commit.gpgsign", "false"],
        cwd=repo_dir, check=True, capture_output=True,
    )
    yield repo_dir


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def make_config(tmp_path: Path, git_identity) -> Callable[..., TemplateConfig]:
    """Factory for a ``TemplateConfig`` writing under ``tmp_path``.

    Defaults follow the reference scenario (alice / Julia 1.1.0 / MIT /
    2020 / Alice, no plugins); keyword arguments override any field.
    """

    def factory(**overrides: Any) -> TemplateConfig:
        fields: dict[str, Any] = {
            "user": "alice",
            "host": "github.com",
            "dest_dir": tmp_path / "out",
            "scratch_dir": tmp_path / "scratch",
            "git_config": dict(git_identity),
            "julia_version": "1.1.0",
            "requirements": [],
            "license": "MIT",
            "years": 2020,
            "authors": "Alice",
            "plugins": [],
        }
        fields.update(overrides)
        return TemplateConfig(**fields)

    return factory


@pytest.fixture
def template_config(make_config) -> TemplateConfig:
    """The reference configuration with no plugins."""
    return make_config()
