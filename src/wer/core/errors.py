"""Error taxonomy for the attribution engine.

Every failure that reaches the CLI is a ``WerError``. Exceptions raised by
GitPython are translated through ``STORE_ERROR_KINDS`` so that the wording
shown to the user depends on the exception type, not on its text.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Type, Union

import git

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class WerError(Exception):
    """Base class for errors reported to the user."""

    kind = "error"

    def __init__(self, message: str, path: Optional[PathLike] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def render(self) -> str:
        """Single human-readable line, prefixed with the offending path."""
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class PathNotFound(WerError):
    kind = "path_not_found"


class NotARepository(WerError):
    kind = "not_a_repository"


class PathOutsideRepository(WerError):
    kind = "path_outside_repository"


class PathIsDirectory(WerError):
    kind = "path_is_directory"


class FileNotTracked(WerError):
    kind = "file_not_tracked"


class NoHistory(WerError):
    kind = "no_history"


class ObjectStoreError(WerError):
    kind = "object_store_error"


class InvalidRequest(WerError):
    kind = "invalid_request"


# Most specific first: lookup walks the exception's MRO.
STORE_ERROR_KINDS: Dict[Type[BaseException], Type[WerError]] = {
    git.exc.InvalidGitRepositoryError: NotARepository,
    git.exc.NoSuchPathError: PathNotFound,
    git.exc.GitCommandError: ObjectStoreError,
    git.exc.BadName: ObjectStoreError,
    git.exc.BadObject: ObjectStoreError,
    git.exc.GitError: ObjectStoreError,
    ValueError: ObjectStoreError,
    KeyError: ObjectStoreError,
    OSError: ObjectStoreError,
}


def classify_store_error(
    exc: BaseException, operation: str, path: Optional[PathLike] = None
) -> WerError:
    """Translate a GitPython failure into a ``WerError``.

    The returned error names the operation that failed. Callers should raise
    it ``from exc`` so the original traceback stays attached.
    """
    if isinstance(exc, WerError):
        return exc

    error_class: Type[WerError] = ObjectStoreError
    for klass in type(exc).__mro__:
        if klass in STORE_ERROR_KINDS:
            error_class = STORE_ERROR_KINDS[klass]
            break

    logger.debug("%s failed with %s: %s", operation, type(exc).__name__, exc)
    if error_class is NotARepository:
        return NotARepository("Path is not in a git repository", path)
    if error_class is PathNotFound:
        return PathNotFound("Path doesn't exist. Check spelling.", path)
    return error_class(f"Failed to {operation}: {exc}", path)
