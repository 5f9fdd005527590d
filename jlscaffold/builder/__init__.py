"""jlscaffold builder module.

Builds the git history of a generated package.

Key classes:
    Repository       - git CLI wrapper (init, config, commits, branches, remotes)
    RepositoryError  - raised by every failing git command
"""

from .repository import Repository, RepositoryError

__all__ = [
    "Repository",
    "RepositoryError",
]
