"""Find the repository that owns a filesystem path."""

import logging
from pathlib import Path, PurePosixPath
from typing import Optional, Union

import git
from git import Repo
from pydantic import BaseModel

from wer.core.errors import (
    NotARepository,
    PathIsDirectory,
    PathNotFound,
    PathOutsideRepository,
    classify_store_error,
)

logger = logging.getLogger(__name__)

ROOT = PurePosixPath(".")


class ResolutionContext(BaseModel):
    """Where relative paths are resolved from."""

    cwd: Path

    @classmethod
    def current(cls) -> "ResolutionContext":
        return cls(cwd=Path.cwd())

    def resolve(self, raw_path: Union[str, Path]) -> Path:
        """Absolute form of ``raw_path``, ``~`` expanded, not yet resolved."""
        path = Path(raw_path).expanduser()
        if not path.is_absolute():
            path = self.cwd / path
        return path


class LocatedPath:
    """A path together with the repository it belongs to.

    Use as a context manager so the repository handle is released when the
    request is done.
    """

    def __init__(self, repo: Repo, absolute_path: Path, relative_path: PurePosixPath):
        self.repo = repo
        self.absolute_path = absolute_path
        self.relative_path = relative_path

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_tree_dir)

    @property
    def is_root(self) -> bool:
        return self.relative_path == ROOT

    def close(self) -> None:
        self.repo.close()

    def __enter__(self) -> "LocatedPath":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"LocatedPath({self.working_dir}, {str(self.relative_path)!r})"


def relative_to_worktree(absolute_path: Path, working_dir: Path) -> PurePosixPath:
    """Strip the working tree prefix, ``.`` for the root itself."""
    relative = absolute_path.relative_to(working_dir)
    if not relative.parts:
        return ROOT
    return PurePosixPath(*relative.parts)


def locate(
    raw_path: Union[str, Path],
    context: Optional[ResolutionContext] = None,
    must_be_file: bool = False,
) -> LocatedPath:
    """Resolve ``raw_path`` and discover the repository that contains it."""
    context = context or ResolutionContext.current()
    candidate = context.resolve(raw_path)

    if not candidate.exists():
        raise PathNotFound("Path doesn't exist. Check spelling.", raw_path)
    absolute_path = candidate.resolve()

    if must_be_file and absolute_path.is_dir():
        raise PathIsDirectory(
            "Blame can only be used on files, not directories", raw_path
        )

    # Discovery starts from the containing directory for files
    search_path = absolute_path if absolute_path.is_dir() else absolute_path.parent

    try:
        repo = Repo(search_path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise NotARepository("Path is not in a git repository", raw_path) from e
    except git.exc.GitError as e:
        raise classify_store_error(e, "open repository", raw_path) from e

    if repo.working_tree_dir is None:
        repo.close()
        raise NotARepository("Repository has no working directory", raw_path)

    working_dir = Path(repo.working_tree_dir).resolve()
    try:
        relative_path = relative_to_worktree(absolute_path, working_dir)
    except ValueError as e:
        repo.close()
        raise PathOutsideRepository(
            f"Path is not within the repository at '{working_dir}'", raw_path
        ) from e

    logger.debug("Located %s in %s as %s", raw_path, working_dir, relative_path)
    return LocatedPath(repo, absolute_path, relative_path)
