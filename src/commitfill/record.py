"""The status record rewritten before every commit."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

from .errors import WriteError


@dataclass(slots=True, frozen=True)
class CommitRecord:
    """The fabricated timestamp of a single commit."""

    date: str

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":")) + "\n"


def write_record(path: Path, record: CommitRecord) -> None:
    """Overwrite ``path`` with ``record``.

    Raises
    ------
    WriteError
        If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(record.to_json())
    except OSError as e:
        raise WriteError(f"Cannot write {path}: {e}") from e


def read_record(path: Path) -> CommitRecord:
    """Load the record currently on disk."""
    with open(path, "r", encoding="utf-8") as f:
        return CommitRecord(**json.load(f))
