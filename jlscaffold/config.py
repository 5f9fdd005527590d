"""jlscaffold configuration.

A single typed ``TemplateConfig`` describes everything about a package except
its name.  It is a frozen Pydantic v2 model: validated once at construction,
then passed read-only through a generation run.  It can be serialised to and
from JSON, or built from environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializeAsAny,
    field_serializer,
    field_validator,
    model_validator,
)

from jlscaffold.constants import PluginKind
from jlscaffold.plugins import Plugin, make_plugin
from jlscaffold.scaffolder.versions import JuliaVersion
from jlscaffold.utils import print_warning


def _current_year() -> str:
    return str(date.today().year)


class TemplateConfig(BaseModel):
    """Settings shared by every package generated from this template.

    Plugins may be given as a list (each indexed by its ``kind``) or as a
    mapping keyed by kind; either way at most one plugin of each kind is
    allowed.  The mapping keeps insertion order, which is the order plugin
    files are generated and ``.gitignore`` patterns are merged in.
    """

    model_config = ConfigDict(frozen=True)

    user: str = Field(..., min_length=1, description="Account name on the remote host")
    host: str = Field(default="github.com")
    ssh_user: str = Field(default="git", description="Login part of the SSH remote")
    dest_dir: Path = Field(default_factory=Path.cwd)
    scratch_dir: Path | None = Field(
        default=None, description="Scratch root; None means a fresh temp dir per run"
    )
    git_config: dict[str, str | int | bool] = Field(default_factory=dict)
    julia_version: JuliaVersion
    requirements: list[str] = Field(default_factory=list)
    license: str | None = Field(default="MIT")
    years: str = Field(default_factory=_current_year)
    authors: str = Field(default="")
    plugins: dict[PluginKind, SerializeAsAny[Plugin]] = Field(default_factory=dict)

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("dest_dir", "scratch_dir")
    @classmethod
    def _absolute(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser().absolute()

    @field_validator("julia_version", mode="before")
    @classmethod
    def _parse_version(cls, value: Any) -> Any:
        if isinstance(value, str):
            return JuliaVersion.parse(value)
        return value

    @field_validator("years", mode="before")
    @classmethod
    def _years_as_text(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("authors", mode="before")
    @classmethod
    def _join_authors(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(author) for author in value)
        return value

    @field_validator("requirements")
    @classmethod
    def _dedupe_requirements(cls, value: list[str]) -> list[str]:
        lines = [line.strip() for line in value if line.strip()]
        unique = list(dict.fromkeys(lines))
        if len(unique) < len(lines):
            print_warning(f"Removed {len(lines) - len(unique)} duplicate requirement(s)")

        seen: dict[str, str] = {}
        for line in unique:
            package = line.split()[0]
            if package in seen:
                raise ValueError(
                    f"Requirement {package!r} is listed with conflicting versions: "
                    f"{seen[package]!r} and {line!r}"
                )
            seen[package] = line
        return unique

    @field_validator("plugins", mode="before")
    @classmethod
    def _index_plugins(cls, value: Any) -> Any:
        if value is None:
            return {}

        indexed: dict[PluginKind, Plugin] = {}
        if isinstance(value, Mapping):
            for key, item in value.items():
                kind = PluginKind(key)
                plugin = make_plugin(item, kind=kind)
                if plugin.kind != kind:
                    raise ValueError(
                        f"Plugin under key {kind.value!r} has kind {plugin.kind.value!r}"
                    )
                indexed[kind] = plugin
            return indexed

        for item in value:
            plugin = make_plugin(item)
            if plugin.kind in indexed:
                raise ValueError(f"Duplicate plugin of kind {plugin.kind.value!r}")
            indexed[plugin.kind] = plugin
        return indexed

    @model_validator(mode="after")
    def _scratch_outside_destination(self) -> "TemplateConfig":
        if self.scratch_dir is not None and self.dest_dir.is_relative_to(self.scratch_dir):
            raise ValueError(
                f"dest_dir {str(self.dest_dir)!r} must not be scratch_dir or lie inside it "
                f"({str(self.scratch_dir)!r}); scratch_dir is deleted after each run"
            )
        return self

    @field_serializer("julia_version")
    def _version_as_text(self, value: JuliaVersion) -> str:
        return str(value)

    # ------------------------------------------------------------------
    # Derived paths and lookups
    # ------------------------------------------------------------------

    def staging_dir(self, pkg_name: str) -> Path:
        """Directory the package is assembled in before being moved into place.

        Raises:
            ValueError: If ``scratch_dir`` has not been resolved yet.
        """
        if self.scratch_dir is None:
            raise ValueError("scratch_dir is not set; resolve it before generating files")
        return self.scratch_dir / pkg_name

    def destination(self, pkg_name: str) -> Path:
        """Final location of the generated package."""
        return self.dest_dir / pkg_name

    def has_plugin(self, kind: PluginKind | str) -> bool:
        return PluginKind(kind) in self.plugins

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file; parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "TemplateConfig":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``TemplateConfig`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "TemplateConfig":
        """Build a ``TemplateConfig`` from environment variables.

        Recognised variables (all optional, keyword *overrides* win):
            JLSCAFFOLD_USER, JLSCAFFOLD_HOST, JLSCAFFOLD_DIR,
            JLSCAFFOLD_SCRATCH_DIR, JLSCAFFOLD_LICENSE, JLSCAFFOLD_AUTHORS,
            JLSCAFFOLD_YEARS, JLSCAFFOLD_JULIA_VERSION.
        """
        env_fields = {
            "JLSCAFFOLD_USER": "user",
            "JLSCAFFOLD_HOST": "host",
            "JLSCAFFOLD_DIR": "dest_dir",
            "JLSCAFFOLD_SCRATCH_DIR": "scratch_dir",
            "JLSCAFFOLD_LICENSE": "license",
            "JLSCAFFOLD_AUTHORS": "authors",
            "JLSCAFFOLD_YEARS": "years",
            "JLSCAFFOLD_JULIA_VERSION": "julia_version",
        }
        kwargs: dict[str, Any] = {}
        for variable, field_name in env_fields.items():
            if os.environ.get(variable):
                kwargs[field_name] = os.environ[variable]
        kwargs.update(overrides)
        return cls(**kwargs)
