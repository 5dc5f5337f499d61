"""Shared fixtures: throw-away git repositories with controlled history."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest
from git import Actor, Repo

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class RepoBuilder:
    """Creates commits with explicit authors and dates."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        with self.repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")
        self._count = 0

    def write(self, relative: str, content: str) -> Path:
        target = self.path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def commit(
        self,
        files: Dict[str, Optional[str]],
        message: str,
        author: str = "Alice",
        when: Optional[datetime] = None,
        parents: Optional[Sequence] = None,
        head: bool = True,
    ):
        """Write (or delete, for ``None``) files and commit them."""
        for relative, content in files.items():
            if content is None:
                self.repo.index.remove([relative], working_tree=True)
            else:
                self.write(relative, content)
                self.repo.index.add([relative])

        if when is None:
            when = BASE_TIME + timedelta(days=self._count)
        self._count += 1

        stamp = f"{int(when.timestamp())} +0000"
        actor = Actor(author, f"{author.lower().replace(' ', '.')}@example.com")
        return self.repo.index.commit(
            message,
            parent_commits=parents,
            head=head,
            author=actor,
            committer=actor,
            author_date=stamp,
            commit_date=stamp,
        )


@pytest.fixture
def builder(tmp_path):
    """An empty repository in a temporary directory."""
    repo_dir = tmp_path / "project"
    repo_dir.mkdir()
    built = RepoBuilder(repo_dir)
    yield built
    built.repo.close()


@pytest.fixture
def abc_repo(builder):
    """A adds README.md, B adds src/lib.x, C modifies README.md.

    A and C share an author.
    """
    a = builder.commit({"README.md": "# Project\n"}, "Add readme", author="Alice")
    b = builder.commit({"src/lib.x": "lib\n"}, "Add library", author="Bob")
    c = builder.commit(
        {"README.md": "# Project\n\nMore words.\n"}, "Expand readme", author="Alice"
    )
    builder.commits = {"A": a, "B": b, "C": c}
    return builder
