"""Commit model for attribution results."""

from datetime import datetime, timezone

import git
from pydantic import BaseModel

SHORT_ID_LENGTH = 7
AUTHOR_DISPLAY_LENGTH = 15


class CommitRecord(BaseModel):
    """An immutable view of one commit read from the object store."""

    hexsha: str
    author_name: str
    author_email: str = ""
    authored_at: datetime
    summary: str

    model_config = {"frozen": True}

    @classmethod
    def from_commit(cls, commit: git.Commit) -> "CommitRecord":
        """Build a record from a GitPython commit."""
        author = commit.author
        summary = commit.summary
        if isinstance(summary, bytes):
            summary = summary.decode("utf-8", "replace")
        return cls(
            hexsha=commit.hexsha,
            author_name=author.name or "",
            author_email=author.email or "",
            authored_at=datetime.fromtimestamp(commit.authored_date, tz=timezone.utc),
            summary=summary or "No message",
        )

    @property
    def short_id(self) -> str:
        return self.hexsha[:SHORT_ID_LENGTH]

    @property
    def display_author(self) -> str:
        """Author name cut to the width of the blame table column."""
        return (self.author_name or "Unknown")[:AUTHOR_DISPLAY_LENGTH]
