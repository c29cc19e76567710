"""
Console formatting helper shared by the lister and deleter.

Provides the banners, horizontal rules, bulleted lists and the framed error
display used by both tools, on top of an injectable output stream and line
reader so the flows can be driven from tests.
"""

import os
import sys
from enum import Enum
from typing import Callable, Iterable, Optional, TextIO

from .logging_config import get_logger
from .messages import HORIZONTAL_RULE_CHAR, LIST_ITEM_DECORATOR, format_message

logger = get_logger('console')


class Padding(Enum):
    """Element printed before/after padded text."""
    NONE = "none"
    BLANK_LINE = "blank_line"
    HORIZONTAL_RULE = "horizontal_rule"


class ConsoleHelper:
    """Consistent prompts, banners and error presentation for the tools."""

    # ANSI color codes
    COLORS = {
        'RED': '\033[91m',
        'GREEN': '\033[92m',
        'YELLOW': '\033[93m',
        'CYAN': '\033[96m',
        'BOLD': '\033[1m',
        'RESET': '\033[0m'
    }

    def __init__(self, output: Optional[TextIO] = None, read_line: Optional[Callable[[], str]] = None,
                 use_colors: Optional[bool] = None, rule_width: int = 116):
        """
        Initialize the console helper.

        Args:
            output: Stream to write to (default: sys.stdout)
            read_line: Callable returning one line of user input (default: input)
            use_colors: Whether to use ANSI color codes. Auto-detects if None.
            rule_width: Number of characters in a horizontal rule
        """
        self.output = output if output is not None else sys.stdout
        self._read_line = read_line if read_line is not None else input

        if use_colors is None:
            self.use_colors = self._supports_color()
        else:
            self.use_colors = use_colors

        self.horizontal_rule = HORIZONTAL_RULE_CHAR * rule_width

    @classmethod
    def from_config(cls, console_config, **kwargs) -> 'ConsoleHelper':
        """Build a helper from a ConsoleConfig section."""
        return cls(use_colors=console_config.use_colors, rule_width=console_config.rule_width, **kwargs)

    # Formatting

    def print_text(self, message: str, *args) -> None:
        """Print a message, filling ``{0}``-style placeholders when args are given."""
        text = message.format(*args) if args else message
        self.output.write(f"{text}\n")
        self.output.flush()

    def print_empty_line(self) -> None:
        self.print_text("")

    def print_horizontal_rule(self) -> None:
        self.print_text(self.horizontal_rule)

    def print_padded_text(self, text: Optional[str] = None, pad_before: bool = True, pad_after: bool = True,
                          padding: Padding = Padding.BLANK_LINE) -> None:
        """
        Print text with optional padding before and after it.

        Args:
            text: Text to print; a horizontal rule when None
            pad_before: Print the padding element before the text
            pad_after: Print the padding element after the text
            padding: Which element to pad with
        """
        if text is None:
            text = self.horizontal_rule

        if pad_before:
            self._print_padding(padding)

        self.print_text(text)

        if pad_after:
            self._print_padding(padding)

    def print_text_followed_by_empty_line(self, message: str, *args) -> None:
        self.print_text(message, *args)
        self.print_empty_line()

    def print_text_followed_by_horizontal_rule(self, message: str, *args) -> None:
        self.print_text(message, *args)
        self.print_horizontal_rule()

    def print_text_surrounded_by_horizontal_rules(self, message: str, *args) -> None:
        self.print_horizontal_rule()
        self.print_text(message, *args)
        self.print_horizontal_rule()

    def print_list(self, items: Iterable[str], decorator: str = LIST_ITEM_DECORATOR) -> None:
        """Print every item on its own line, each preceded by the decorator."""
        items = list(items)
        self.print_text(f"{decorator}{decorator.join(items)}")

    def print_initial_blurb_message(self, welcome_message: str, blurb_message: str, source_message: str) -> None:
        """Print the tool banner: welcome, description and input guidance."""
        self.print_padded_text(welcome_message, padding=Padding.HORIZONTAL_RULE)
        self.print_padded_text(blurb_message, padding=Padding.BLANK_LINE)
        self.print_horizontal_rule()
        self.print_padded_text(source_message, padding=Padding.BLANK_LINE)
        self.print_horizontal_rule()

    def print_error_message_then_halt(self, message: str, *args) -> None:
        """
        Print an error framed by horizontal rules and wait for acknowledgement.

        The caller is expected to stop all further work once this returns.
        """
        text = message.format(*args) if args else message
        logger.debug(f"Halting with error: {text}")

        self.print_empty_line()
        self.print_horizontal_rule()
        self.print_text(self._colorize(text, 'RED'))
        self.read_input()
        self.print_horizontal_rule()
        self.print_empty_line()

    def print_exception_then_halt(self, exc: BaseException, detail: Optional[str] = None) -> None:
        """Print the exception template for exc then halt."""
        self.print_error_message_then_halt(
            f"{format_message('exception', type(exc).__name__, exc, detail or '')} "
            f"{format_message('restart_application')}"
        )

    # Inputting

    def prompt_user_for_input(self, prompt_text: str, add_empty_line_before_prompt: bool = True) -> None:
        if add_empty_line_before_prompt:
            self.print_empty_line()

        self.print_text(prompt_text)

    def read_input(self, raise_on_eof: bool = False) -> str:
        """
        Read one line of user input with surrounding whitespace removed.

        Args:
            raise_on_eof: Re-raise EOFError instead of returning an empty line

        Returns:
            The trimmed line; "" at end of input unless raise_on_eof is set
        """
        try:
            line = self._read_line()
        except EOFError:
            if raise_on_eof:
                raise
            logger.debug("End of input reached, treating as empty line")
            return ""
        return (line or "").strip()

    def wait_for_acknowledgement(self) -> None:
        """Block until the user presses enter."""
        self.prompt_user_for_input(format_message('press_enter_to_exit'))
        self.read_input()

    def _print_padding(self, padding: Padding) -> None:
        if padding == Padding.BLANK_LINE:
            self.print_empty_line()
        elif padding == Padding.HORIZONTAL_RULE:
            self.print_horizontal_rule()

    def _supports_color(self) -> bool:
        """
        Auto-detect if the terminal supports color output.

        Returns:
            True if colors are supported, False otherwise
        """
        if os.environ.get('NO_COLOR'):
            return False

        # Check for common CI environments that support colors (independent of TTY)
        ci_with_colors = ['GITHUB_ACTIONS', 'GITLAB_CI', 'BUILDKITE']
        if any(os.environ.get(var) for var in ci_with_colors):
            return True

        # Check if output is a TTY and not redirected
        if not hasattr(self.output, 'isatty') or not self.output.isatty():
            return False

        if sys.platform == "win32":
            return True

        # Check environment variables for terminal color support
        term = os.environ.get('TERM', '').lower()
        if 'color' in term or term in ['xterm', 'xterm-256color', 'screen']:
            return True

        return False

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"
