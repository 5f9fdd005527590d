"""Single-file writer used by every content generator and plugin."""

from __future__ import annotations

from pathlib import Path


def gen_file(path: str | Path, text: str) -> int:
    """Write *text* to *path*, always ending the file with exactly one newline.

    Missing parent directories are created and an existing file is
    overwritten.  A newline is appended only when *text* does not already end
    with one.

    Returns:
        The number of bytes written.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    if not text.endswith("\n"):
        text += "\n"
    data = text.encode("utf-8")
    out.write_bytes(data)
    return len(data)
