"""Text rendering of attribution results."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from rich.color import ColorSystem
from rich.style import Style

from wer.core.highlight import SyntaxHighlighter
from wer.models.attribution import ContributorReport, LineAttribution
from wer.models.commit import AUTHOR_DISPLAY_LENGTH, SHORT_ID_LENGTH, CommitRecord

UNKNOWN = "Unknown"
UNKNOWN_ID = "~" * SHORT_ID_LENGTH

DATE_WIDTH = 6
MIN_LINE_NUMBER_WIDTH = 4
CODE_BORDER_WIDTH = 100


class ColorScheme:
    """ANSI styling for commit ids and dates, or none at all."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.commit_style = Style(color="yellow")
        self.date_style = Style(color="cyan")

    def _paint(self, text: str, style: Style) -> str:
        if not self.enabled:
            return text
        return style.render(text, color_system=ColorSystem.STANDARD)

    def commit(self, text: str) -> str:
        return self._paint(text, self.commit_style)

    def date(self, text: str) -> str:
        return self._paint(text, self.date_style)


def format_date(moment: datetime, with_year: bool) -> str:
    """``22 May`` for blame rows, ``22 May 2024`` for single attributions."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%d %b %Y" if with_year else "%d %b")


def format_commit_line(
    record: CommitRecord, colors: ColorScheme, message_separate: bool = False
) -> str:
    head = (
        f"{colors.commit(record.short_id)} {record.display_author} - "
        f"{colors.date(format_date(record.authored_at, with_year=True))}"
    )
    if message_separate:
        return f"{head}\n└─ {record.summary}"
    return f"{head}: {record.summary}"


def format_last_touch(
    record: CommitRecord,
    colors: ColorScheme,
    date_only: bool = False,
    message_separate: bool = False,
) -> str:
    if date_only:
        return colors.date(format_date(record.authored_at, with_year=True))
    return format_commit_line(record, colors, message_separate)


def format_contributors(
    report: ContributorReport, colors: ColorScheme, message_separate: bool = False
) -> str:
    result = "\n".join(
        format_commit_line(record, colors, message_separate)
        for record in report.contributors
    )
    if report.is_short:
        result += (
            f"\nSearched for {report.requested} "
            f"but only {len(report.contributors)} contributed"
        )
    return result


def _border(left: str, middle: str, right: str, widths: Sequence[int]) -> str:
    return left + middle.join("─" * width for width in widths) + right


def _row_fields(commit: Optional[CommitRecord]):
    """Short id, author, date and summary of a row, or the Unknown sentinel."""
    if commit is None:
        return UNKNOWN_ID, UNKNOWN, UNKNOWN, UNKNOWN
    return (
        commit.short_id,
        commit.display_author,
        format_date(commit.authored_at, with_year=False),
        commit.summary,
    )


def format_blame_table(
    rows: List[LineAttribution],
    file_path: Path,
    colors: ColorScheme,
    highlighter: Optional[SyntaxHighlighter] = None,
    date_only: bool = False,
    message_separate: bool = False,
) -> str:
    """Bordered blame table, full or date-only, ending with a newline."""
    number_width = max(MIN_LINE_NUMBER_WIDTH, len(str(len(rows))))

    if date_only:
        widths = [DATE_WIDTH + 2, number_width + 2, CODE_BORDER_WIDTH]
        header = f"│ {'Date':<{DATE_WIDTH}} │ {'Line':<{number_width}} │ Code"
    else:
        widths = [
            SHORT_ID_LENGTH + 2,
            AUTHOR_DISPLAY_LENGTH + 2,
            DATE_WIDTH + 2,
            number_width + 2,
            CODE_BORDER_WIDTH,
        ]
        header = (
            f"│ {'Commit':<{SHORT_ID_LENGTH}} │ {'Name':<{AUTHOR_DISPLAY_LENGTH}} │ "
            f"{'Date':<{DATE_WIDTH}} │ {'Line':<{number_width}} │ Code"
        )

    lines = [_border("┌", "┬", "┐", widths), header, _border("├", "┼", "┤", widths)]

    for row in rows:
        short_id, author, date, summary = _row_fields(row.commit)
        code = row.text
        if highlighter is not None:
            code = highlighter.highlight_line(row.text, file_path, row.line_number)

        date_cell = colors.date(f"{date:<{DATE_WIDTH}}")
        number_cell = f"{row.line_number:>{number_width}}"

        if date_only:
            lines.append(f"│ {date_cell} │ {number_cell} │ {code}")
            continue

        id_cell = colors.commit(f"{short_id:<{SHORT_ID_LENGTH}}")
        lines.append(
            f"│ {id_cell} │ {author:<{AUTHOR_DISPLAY_LENGTH}} │ "
            f"{date_cell} │ {number_cell} │ {code}"
        )
        if message_separate:
            lines.append(
                f"│ {'':<{SHORT_ID_LENGTH}} │ {'':<{AUTHOR_DISPLAY_LENGTH}} │ "
                f"{'':<{DATE_WIDTH}} │ {'':<{number_width}} │ └─ {summary}"
            )

    lines.append(_border("└", "┴", "┘", widths))
    return "\n".join(lines) + "\n"
