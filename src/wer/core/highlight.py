"""Terminal syntax highlighting for blame table lines."""

import logging
from pathlib import Path
from typing import Dict

from rich.console import Console
from rich.syntax import Syntax

from wer.config import DEFAULT_THEME

logger = logging.getLogger(__name__)

# Extensions pygments does not know, mapped to the closest lexer
LEXER_FALLBACKS = {
    ".mdx": "markdown",
}


class SyntaxHighlighter:
    """Highlights single lines using the lexer matching the file name."""

    def __init__(self, theme: str = DEFAULT_THEME):
        self.theme = theme
        self._console = Console(
            force_terminal=True,
            color_system="truecolor",
            width=100_000,
            highlight=False,
            markup=False,
            emoji=False,
        )
        self._lexers: Dict[Path, str] = {}

    def lexer_for(self, file_path: Path) -> str:
        lexer = self._lexers.get(file_path)
        if lexer is None:
            lexer = LEXER_FALLBACKS.get(file_path.suffix.lower())
            if lexer is None:
                lexer = Syntax.guess_lexer(str(file_path))
            self._lexers[file_path] = lexer
        return lexer

    def highlight_line(self, line: str, file_path: Path, line_number: int) -> str:
        """Return ``line`` with ANSI escapes, or unchanged if highlighting fails."""
        try:
            syntax = Syntax(
                line,
                self.lexer_for(file_path),
                theme=self.theme,
                background_color="default",
            )
            text = syntax.highlight(line)
            text.rstrip()
            with self._console.capture() as capture:
                self._console.print(text, end="", soft_wrap=True)
            return capture.get()
        except Exception as e:
            logger.debug("Highlighting %s:%d failed: %s", file_path, line_number, e)
            return line
