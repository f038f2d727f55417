"""Index a directory tree of ROM files into a JSON document."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Union

__all__ = ["FileEntry", "DirEntry", "Entry", "scan_directory", "to_json", "main"]


@dataclass(frozen=True)
class FileEntry:
    path: str


@dataclass(frozen=True)
class DirEntry:
    path: str
    entries: list[Entry] = field(default_factory=list)


Entry = Union[FileEntry, DirEntry]


def _sort_key(entry: os.DirEntry) -> bytes:
    # ASCII-only case folding, compared as bytes.
    return os.fsencode(entry.name).lower()


def scan_directory(root: str) -> DirEntry:
    """Recursively list a directory, entries sorted case-insensitively by name."""
    with os.scandir(root) as iterator:
        children = sorted(iterator, key=_sort_key)

    entries: list[Entry] = []
    for child in children:
        path = os.path.join(root, child.name)
        if child.is_dir(follow_symlinks=False):
            entries.append(scan_directory(path))
        else:
            entries.append(FileEntry(path))
    return DirEntry(root, entries)


def _to_dict(entry: Entry) -> dict[str, Any]:
    if isinstance(entry, FileEntry):
        return {"file": {"path": entry.path}}
    return {
        "dir": {
            "path": entry.path,
            "entries": [_to_dict(child) for child in entry.entries],
        }
    }


def to_json(entry: Entry) -> str:
    """Compact JSON with each entry tagged as "file" or "dir"."""
    return json.dumps(_to_dict(entry), separators=(",", ":"), ensure_ascii=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write a JSON index of a ROM directory.")
    parser.add_argument("root", nargs="?", default="roms", help="directory to index")
    parser.add_argument("-o", "--output", default="roms.json", help="file to write")
    args = parser.parse_args(argv)

    try:
        index = scan_directory(args.root)
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(to_json(index))
    except OSError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())