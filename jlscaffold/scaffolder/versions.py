"""Julia version numbers and the ``REQUIRE`` version floor."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

_VERSION_PATTERN = re.compile(
    r"^v?(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)


class JuliaVersion(BaseModel):
    """A semantic version: ``major.minor.patch`` plus an optional prerelease tag."""

    model_config = ConfigDict(frozen=True)

    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(default=0, ge=0)
    prerelease: tuple[str, ...] = Field(default=())

    @classmethod
    def parse(cls, text: str) -> "JuliaVersion":
        """Parse ``"1.3.0-beta"``, ``"v1.2"`` or ``"1.2.3+build"``.

        Raises:
            ValueError: If *text* is not a version number.
        """
        match = _VERSION_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Invalid version number: {text!r}")
        prerelease = match.group("prerelease")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch") or 0),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
        )

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{'.'.join(self.prerelease)}"
        return base


def version_floor(v: JuliaVersion) -> str:
    """Format *v* for the ``julia`` line of a ``REQUIRE`` file.

    Returns ``"major.minor"`` for the most recent release relative to *v*.
    A prerelease of the first patch of a minor series (``1.3.0-beta``)
    returns ``"major.minor-"`` instead, which ``REQUIRE`` reads as "any
    prerelease of this series".

    Examples::

        version_floor(JuliaVersion.parse("1.2.3"))       -> "1.2"
        version_floor(JuliaVersion.parse("1.3.0-beta"))  -> "1.3-"
        version_floor(JuliaVersion.parse("1.3.1-beta"))  -> "1.3"
    """
    if not v.prerelease or v.patch > 0:
        return f"{v.major}.{v.minor}"
    return f"{v.major}.{v.minor}-"
