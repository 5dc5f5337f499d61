"""Walk commit history to find the commits that touched a path."""

import logging
from pathlib import PurePosixPath
from typing import Iterator, List, Set

import git
from git import Repo

from wer.core.errors import InvalidRequest, NoHistory, classify_store_error
from wer.core.locator import ROOT
from wer.models.attribution import ContributorReport
from wer.models.commit import CommitRecord

logger = logging.getLogger(__name__)

STORE_ERRORS = (git.exc.GitError, ValueError, OSError)


def is_path_related(changed_path: str, target: PurePosixPath) -> bool:
    """True when one path equals, contains or lies inside the other.

    Paths are compared by whole components, so ``src`` is not related to
    ``src2/file``. The repository root is related to everything.
    """
    if target == ROOT:
        return True
    changed_parts = PurePosixPath(changed_path).parts
    target_parts = target.parts
    common = min(len(changed_parts), len(target_parts))
    return changed_parts[:common] == target_parts[:common]


def tree_contains_path(tree: git.Tree, path: PurePosixPath) -> bool:
    if path == ROOT:
        return True
    try:
        tree / path.as_posix()
    except KeyError:
        return False
    return True


def touches(commit: git.Commit, relative_path: PurePosixPath) -> bool:
    """Decide whether ``commit`` changed ``relative_path``.

    Root commits touch whatever their tree contains. Other commits are
    compared against their first parent only. A merge therefore touches any
    path that differs from its first parent, including paths brought in
    through a second parent, and side-branch edits show up on the merge.
    """
    try:
        if not commit.parents:
            return tree_contains_path(commit.tree, relative_path)

        parent = commit.parents[0]
        for diff in parent.diff(commit):
            for changed in (diff.a_path, diff.b_path):
                if changed and is_path_related(changed, relative_path):
                    return True
        return False
    except STORE_ERRORS as e:
        raise classify_store_error(
            e, f"diff commit {commit.hexsha[:7]}", str(relative_path)
        ) from e


def iter_touching_commits(
    repo: Repo, relative_path: PurePosixPath
) -> Iterator[git.Commit]:
    """Yield commits reachable from HEAD that touch the path, newest first."""
    try:
        head = repo.head.commit
    except ValueError:
        # Unborn branch: nothing has been committed yet
        logger.debug("HEAD of %s has no commits", repo.working_tree_dir)
        return

    inspected = 0
    try:
        for commit in repo.iter_commits(head):
            inspected += 1
            if touches(commit, relative_path):
                logger.debug(
                    "%s touches %s (after %d commits)",
                    commit.hexsha[:7],
                    relative_path,
                    inspected,
                )
                yield commit
    except STORE_ERRORS as e:
        raise classify_store_error(e, "walk history", str(relative_path)) from e

    logger.debug("Walked %d commits for %s", inspected, relative_path)


def last_touching(repo: Repo, relative_path: PurePosixPath) -> CommitRecord:
    """The most recent commit that touched ``relative_path``."""
    for commit in iter_touching_commits(repo, relative_path):
        return CommitRecord.from_commit(commit)
    raise NoHistory("No commits found for path", str(relative_path))


def last_n_contributors(
    repo: Repo, relative_path: PurePosixPath, n: int
) -> ContributorReport:
    """The last ``n`` distinct authors of ``relative_path``, newest first.

    Authors are told apart by their display name, so two names that only
    differ after the first 15 characters count as one contributor.
    """
    if n < 1:
        raise InvalidRequest("Number of contributors must be at least 1")

    contributors: List[CommitRecord] = []
    seen_authors: Set[str] = set()

    for commit in iter_touching_commits(repo, relative_path):
        record = CommitRecord.from_commit(commit)
        if record.display_author in seen_authors:
            continue
        seen_authors.add(record.display_author)
        contributors.append(record)
        if len(contributors) >= n:
            break

    if not contributors:
        raise NoHistory("No commits found for path", str(relative_path))

    return ContributorReport(requested=n, contributors=contributors)

