"""Managed ``.gitignore`` block for Trellis project files.

The block is bounded by markers:
    #trellis-do-not-edit-begin
    #trellis-do-not-edit-end

Inserting drops any existing block and appends a fresh one at the end, so
repeated inserts leave exactly one copy. Other lines are untouched.
"""

from pathlib import Path

START_MARKER = "#trellis-do-not-edit-begin"
END_MARKER = "#trellis-do-not-edit-end"

IGNORE_ENTRIES = (
    "trellis/#current-cloud-backend",
    "trellis/.config/local-*",
    "trellis/logs",
    "trellis/mock-data",
    "trellis/backend/.temp",
    "build/",
    "dist/",
    "node_modules/",
)


def managed_block(entries: tuple[str, ...] = IGNORE_ENTRIES) -> str:
    """Render the managed ignore block."""
    return "\n".join((START_MARKER, *entries, END_MARKER))


def _strip_managed_block(text: str) -> str:
    # Each end marker closes the nearest begin marker above it. Unpaired
    # markers are ordinary lines.
    kept: list[str] = []
    open_at: int | None = None
    for line in text.splitlines():
        marker = line.strip()
        if marker == END_MARKER and open_at is not None:
            del kept[open_at:]
            while kept and not kept[-1].strip():
                kept.pop()
            open_at = None
            continue
        if marker == START_MARKER:
            open_at = len(kept)
        kept.append(line)
    return "\n".join(kept)


def insert_ignore_entry(path: Path, entry: str | None = None) -> None:
    """Insert (or refresh) the managed block in the ignore file at ``path``.

    Creates the file when missing. ``entry`` defaults to the standard
    block; passing a string inserts that text as the managed block body.

    Raises:
        OSError: When the file cannot be read or written.
        UnicodeDecodeError: When the existing file is not UTF-8.
    """
    block = managed_block() if entry is None else managed_block((entry,))
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    stripped = _strip_managed_block(existing)
    result = (stripped.rstrip() + "\n\n" + block + "\n") if stripped.strip() else block + "\n"
    path.write_text(result, encoding="utf-8")
