"""Per-line attribution of a file's current content."""

import logging
from pathlib import Path
from typing import Dict, List

from wer.core.errors import FileNotTracked, PathIsDirectory, classify_store_error
from wer.core.history import STORE_ERRORS, tree_contains_path
from wer.core.locator import LocatedPath
from wer.models.attribution import LineAttribution
from wer.models.commit import CommitRecord

logger = logging.getLogger(__name__)


def read_lines(path: Path) -> List[str]:
    """Lines of the working tree file without terminators.

    A trailing newline does not start an extra empty line.
    """
    content = path.read_bytes().decode("utf-8", "replace")
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _not_tracked(located: LocatedPath) -> FileNotTracked:
    relative = located.relative_path.as_posix()
    return FileNotTracked(
        f"File exists but is not tracked by git. "
        f"Use 'git add {relative}' to track it first.",
        relative,
    )


def line_history(located: LocatedPath) -> Dict[int, CommitRecord]:
    """Map 1-based line numbers of the HEAD version to their commits."""
    repo = located.repo
    relative = located.relative_path.as_posix()

    try:
        head = repo.head.commit
    except ValueError as e:
        raise _not_tracked(located) from e

    try:
        if not tree_contains_path(head.tree, located.relative_path):
            raise _not_tracked(located)
        if (head.tree / relative).type != "blob":
            raise _not_tracked(located)

        records: Dict[str, CommitRecord] = {}
        history: Dict[int, CommitRecord] = {}
        for entry in repo.blame_incremental(head.hexsha, relative):
            record = records.get(entry.commit.hexsha)
            if record is None:
                record = CommitRecord.from_commit(entry.commit)
                records[entry.commit.hexsha] = record
            for line_number in entry.linenos:
                history[line_number] = record
    except STORE_ERRORS as e:
        raise classify_store_error(e, "get blame for file", relative) from e

    logger.debug(
        "Blame for %s: %d lines from %d commits", relative, len(history), len(records)
    )
    return history


def blame(located: LocatedPath) -> List[LineAttribution]:
    """Attribute every current line of the file to the commit that added it.

    Lines the object store has no attribution for (for example uncommitted
    additions past the end of the committed file) carry no commit.
    """
    if located.absolute_path.is_dir():
        raise PathIsDirectory(
            "Blame can only be used on files, not directories",
            located.relative_path.as_posix(),
        )

    history = line_history(located)

    try:
        lines = read_lines(located.absolute_path)
    except OSError as e:
        raise classify_store_error(
            e, "read file", located.relative_path.as_posix()
        ) from e

    return [
        LineAttribution(line_number=number, text=text, commit=history.get(number))
        for number, text in enumerate(lines, start=1)
    ]
