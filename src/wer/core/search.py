"""Turn a path argument into the paths it may refer to."""

import logging
import os
from pathlib import Path
from typing import List, Optional

from wer.core.errors import PathNotFound

logger = logging.getLogger(__name__)

IGNORED_DIRECTORIES = frozenset(
    {
        ".git",
        ".svn",
        ".hg",
        "node_modules",
        "target",
        "build",
        "dist",
        ".vscode",
        ".idea",
        "__pycache__",
    }
)


def is_ignored_directory(name: str) -> bool:
    """Directories skipped during a search by name, including all dot-dirs."""
    return name in IGNORED_DIRECTORIES or name.startswith(".")


def find_all_matches(name: str, base_dir: Optional[Path] = None) -> List[str]:
    """Paths that ``name`` may refer to.

    - ``/absolute`` and ``~/home`` paths are returned as given.
    - anything with a ``/`` must exist relative to ``base_dir``.
    - a bare name that exists in ``base_dir`` is returned as given.
    - otherwise every file or directory called ``name`` below ``base_dir``
      is returned, relative to ``base_dir``.
    """
    if name.startswith("/") or name.startswith("~/"):
        return [name]

    base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    if "/" in name:
        if (base_dir / name).exists():
            return [name]
        raise PathNotFound("Path not found", name)

    if (base_dir / name).exists():
        return [name]

    matches = [
        path.relative_to(base_dir).as_posix() for path in search_by_name(base_dir, name)
    ]
    if not matches:
        raise PathNotFound(
            f"No file or directory named '{name}' found starting from current directory"
        )

    logger.debug("Found %d matches for %s under %s", len(matches), name, base_dir)
    return sorted(matches)


def _log_walk_error(error: OSError) -> None:
    logger.debug("Skipping %s during search: %s", error.filename, error.strerror)


def search_by_name(root: Path, name: str) -> List[Path]:
    """Every entry called ``name`` below ``root``, skipping ignored directories.

    Directories that cannot be read are skipped and logged at debug level.
    """
    matches: List[Path] = []
    for current, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        current_path = Path(current)
        for entry in dirnames + filenames:
            if entry == name:
                matches.append(current_path / entry)
        # Prune in place so os.walk does not descend
        dirnames[:] = [d for d in dirnames if not is_ignored_directory(d)]
    return matches
