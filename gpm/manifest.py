""" Reading Godeps manifests

A manifest lists one dependency per line, an import path followed by the
revision it should be pinned to. Everything after a `#` is a comment.

Example:

# This is a comment
github.com/nu7hatch/gotrail         v0.0.2
github.com/replicon/fast-archiver   v1.02   # trailing comment
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from gpm.errors import ManifestNotFound

DEFAULT_MANIFEST = Path("Godeps")


@dataclass(frozen=True)
class DependencyEntry:
    import_path: str
    revision: str


def strip_comment(line: str) -> str:
    return line.split("#", 1)[0]


def parse_manifest_lines(lines: Iterable[str]) -> list[DependencyEntry]:
    """Parse manifest lines into entries, preserving their order.

    Duplicate import paths are kept. A line without a revision yields
    an entry with an empty revision, tokens after the revision are ignored.

    Args:
        lines (Iterable[str]): raw manifest lines

    Returns:
        list[DependencyEntry]: the parsed entries
    """
    entries = []
    for line in lines:
        tokens = strip_comment(line).split()
        if not tokens:
            continue
        revision = tokens[1] if len(tokens) > 1 else ""
        entries.append(DependencyEntry(tokens[0], revision))
    return entries


def parse_manifest(text: str) -> list[DependencyEntry]:
    return parse_manifest_lines(text.splitlines())


def read_manifest(path: Path) -> list[DependencyEntry]:
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return parse_manifest(f.read())
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestNotFound(f"{path} file not found or unreadable: {e}")
