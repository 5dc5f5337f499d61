"""Attribution result and request models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from wer.core.errors import InvalidRequest
from wer.models.commit import CommitRecord


class AttributionMode(str, Enum):
    """What kind of answer a request asks for."""

    LAST_TOUCH = "last_touch"
    LAST_CONTRIBUTORS = "last_contributors"
    BLAME = "blame"


class ContributorSearchStatus(str, Enum):
    """Whether the history held as many contributors as were requested."""

    EXACT = "exact"
    SHORT = "short"


class LineAttribution(BaseModel):
    """One row of a blame table."""

    line_number: int
    text: str
    commit: Optional[CommitRecord] = None

    model_config = {"frozen": True}

    @property
    def is_unknown(self) -> bool:
        return self.commit is None


class ContributorReport(BaseModel):
    """The last distinct contributors to a path, most recent first."""

    requested: int
    contributors: List[CommitRecord]

    @property
    def status(self) -> ContributorSearchStatus:
        if len(self.contributors) < self.requested:
            return ContributorSearchStatus.SHORT
        return ContributorSearchStatus.EXACT

    @property
    def is_short(self) -> bool:
        return self.status is ContributorSearchStatus.SHORT


class AttributionRequest(BaseModel):
    """Display and mode options for one invocation."""

    blame: bool = False
    date_only: bool = False
    commit_message: bool = False
    last: Optional[int] = None

    @property
    def mode(self) -> AttributionMode:
        if self.blame:
            return AttributionMode.BLAME
        if self.last is not None:
            return AttributionMode.LAST_CONTRIBUTORS
        return AttributionMode.LAST_TOUCH

    def validate_options(self) -> None:
        """Reject option combinations that cannot be honoured together."""
        if self.date_only and self.commit_message:
            raise InvalidRequest(
                "Cannot use both --date-only and --commit-message flags together. "
                "Choose one."
            )
        if self.last is not None and self.blame:
            raise InvalidRequest(
                "--last flag only works in normal mode, not with --blame"
            )
        if self.last is not None and self.last < 1:
            raise InvalidRequest("--last must be at least 1")
