"""Command line interface for wer."""

import logging
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape

from wer import __version__
from wer.config import WerSettings
from wer.core.blame import blame as blame_file
from wer.core.errors import InvalidRequest, WerError
from wer.core.highlight import SyntaxHighlighter
from wer.core.history import last_n_contributors, last_touching
from wer.core.locator import ResolutionContext, locate
from wer.core.render import (
    ColorScheme,
    format_blame_table,
    format_contributors,
    format_last_touch,
)
from wer.core.search import find_all_matches
from wer.log import configure_logging
from wer.models.attribution import AttributionMode, AttributionRequest

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def resolve_targets(
    path: Optional[str], request: AttributionRequest, context: ResolutionContext
) -> List[str]:
    """Expand the path argument into the paths to report on."""
    if path is None:
        return ["."]

    matches = find_all_matches(path, context.cwd)

    if request.mode is AttributionMode.BLAME and len(matches) > 1:
        listing = "\n".join(f"  {i}. {match}" for i, match in enumerate(matches, 1))
        raise InvalidRequest(
            f"Multiple files/directories named '{path}' found:\n{listing}\n\n"
            "Blame mode only works with a single file. "
            "Please specify the full path to the desired file."
        )
    return matches


def render_target(
    target: str,
    request: AttributionRequest,
    context: ResolutionContext,
    colors: ColorScheme,
    highlighter: Optional[SyntaxHighlighter] = None,
) -> str:
    """Full output for one path, or a ``WerError``."""
    if request.mode is AttributionMode.BLAME:
        with locate(target, context, must_be_file=True) as located:
            rows = blame_file(located)
            return format_blame_table(
                rows,
                located.absolute_path,
                colors,
                highlighter=highlighter,
                date_only=request.date_only,
                message_separate=request.commit_message,
            )

    with locate(target, context) as located:
        if request.mode is AttributionMode.LAST_CONTRIBUTORS:
            report = last_n_contributors(
                located.repo, located.relative_path, request.last
            )
            return format_contributors(report, colors, request.commit_message)

        record = last_touching(located.repo, located.relative_path)
        return format_last_touch(
            record,
            colors,
            date_only=request.date_only,
            message_separate=request.commit_message,
        )


def _print_error(error: WerError, target: Optional[str] = None) -> None:
    text = f"{target}: {error.message}" if target else error.render()
    console.print(f"[red]Error:[/red] {escape(text)}", soft_wrap=True)


@click.command()
@click.argument("path", required=False)
@click.option(
    "-b",
    "--blame",
    is_flag=True,
    help="Show git blame for the file (only works with files, not directories)",
)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("-d", "--date-only", is_flag=True, help="Only show dates")
@click.option(
    "-m", "--commit-message", is_flag=True, help="Show commit messages on their own line"
)
@click.option(
    "-l",
    "--last",
    type=int,
    default=None,
    metavar="N",
    help="Show the last N distinct contributors",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="wer")
def main(
    path: Optional[str],
    blame: bool,
    no_color: bool,
    date_only: bool,
    commit_message: bool,
    last: Optional[int],
    verbose: bool,
):
    """Find who last edited a file or directory.

    PATH may be a path or a bare name, which is searched for below the
    current directory. Defaults to the current directory.
    """
    settings = WerSettings.from_env()
    configure_logging(logging.DEBUG if verbose else settings.log_level_number)

    request = AttributionRequest(
        blame=blame, date_only=date_only, commit_message=commit_message, last=last
    )
    context = ResolutionContext.current()

    try:
        request.validate_options()
        targets = resolve_targets(path, request, context)
    except WerError as e:
        _print_error(e)
        sys.exit(1)

    use_color = not (no_color or settings.no_color)
    colors = ColorScheme(enabled=use_color)
    highlighter = SyntaxHighlighter(settings.theme) if use_color else None

    failed = 0
    for target in targets:
        try:
            output = render_target(target, request, context, colors, highlighter)
        except WerError as e:
            # One bad match must not hide the others
            failed += 1
            _print_error(e, target)
            continue

        if len(targets) > 1:
            click.echo(f"{target}:\n{output}\n")
        else:
            click.echo(f"{output}\n")

    if failed:
        logger.debug("%d of %d paths failed", failed, len(targets))
        sys.exit(1)


if __name__ == "__main__":
    main()
