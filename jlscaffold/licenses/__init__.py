"""Static license bodies used for a generated package's ``LICENSE`` file.

Each body lives in a file named after its identifier (``data/MIT``) and
holds the license text without the copyright line, which the generator
writes itself.
"""

from __future__ import annotations

from pathlib import Path

from rich.table import Table

from jlscaffold.utils import console

LICENSE_DIR = Path(__file__).parent / "data"

LICENSE_NAMES: dict[str, str] = {
    "BSD": "BSD 2-Clause \"Simplified\" License",
    "ISC": "Internet Systems Consortium License",
    "MIT": "MIT \"Expat\" License",
}


class UnknownLicenseError(ValueError):
    """Raised when a license identifier has no body in the store."""

    def __init__(self, identifier: str, available: list[str] | None = None):
        self.identifier = identifier
        self.available = available or []
        hint = f" (available: {', '.join(self.available)})" if self.available else ""
        super().__init__(f"License {identifier!r} is not available{hint}")


class LicenseStore:
    """Looks up license bodies by identifier in a directory of text files."""

    def __init__(self, directory: str | Path = LICENSE_DIR):
        self.directory = Path(directory)

    def identifiers(self) -> list[str]:
        """Return the known identifiers, sorted."""
        if not self.directory.is_dir():
            return []
        return sorted(p.name for p in self.directory.iterdir() if p.is_file())

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier in self.identifiers()

    def read_body(self, identifier: str) -> str:
        """Return the body of license *identifier*.

        Raises:
            UnknownLicenseError: If the store has no such license.
        """
        if identifier not in self:
            raise UnknownLicenseError(identifier, self.identifiers())
        return (self.directory / identifier).read_text(encoding="utf-8")


def available_licenses(store: LicenseStore | None = None) -> dict[str, str]:
    """Return ``{identifier: full name}`` for every license in *store*."""
    store = store or LicenseStore()
    return {
        identifier: LICENSE_NAMES.get(identifier, identifier)
        for identifier in store.identifiers()
    }


def print_licenses(store: LicenseStore | None = None) -> None:
    """Print the available licenses as a table."""
    table = Table(title="Available licenses", show_header=True, header_style="bold cyan")
    table.add_column("Identifier", style="dim", no_wrap=True)
    table.add_column("Name")

    for identifier, name in available_licenses(store).items():
        table.add_row(identifier, name)

    console.print(table)


__all__ = [
    "LICENSE_DIR",
    "LicenseStore",
    "UnknownLicenseError",
    "available_licenses",
    "print_licenses",
]
