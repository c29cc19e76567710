"""
Interactive input validation.

``prompt_until_valid`` keeps asking for a value until it passes a predicate;
the predicates below cover the fields gathered by the lister and deleter.
"""

import os
import re
from typing import Callable, Optional
from urllib.parse import urlsplit, urlunsplit

from .exceptions import InputClosedError
from .logging_config import get_logger
from .messages import format_message

logger = get_logger('validation')

# NuGet package id rules: word characters separated by single '.', '-' or '_'
PACKAGE_ID_PATTERN = re.compile(r'^\w+(?:[_.-]\w+)*$')
MAX_PACKAGE_ID_LENGTH = 100

FEED_URL_SCHEMES = ('http', 'https')


def prompt_until_valid(prompt_text: str, read_input: Optional[Callable[[], str]], predicate: Callable[[str], bool],
                       error_template: str, console=None, allow_empty: bool = False) -> str:
    """
    Prompt repeatedly until the user supplies a value the predicate accepts.

    Every attempt shows the prompt, reads one line and trims it. Blank input
    is rejected before the predicate runs, unless allow_empty is set, in which
    case an empty string is returned as a deliberate "no value" answer. Each
    rejected attempt shows exactly one error, formatted with the rejected
    value.

    Args:
        prompt_text: Text shown before each read
        read_input: Callable returning one raw line; defaults to the console reader
        predicate: Validation applied to the trimmed, non-empty value
        error_template: Error message with a ``{0}`` placeholder for the value
        console: ConsoleHelper used for display (a default one when None)
        allow_empty: Accept blank input and return ""

    Returns:
        The trimmed value that passed validation

    Raises:
        InputClosedError: If input ends before a required value was entered
    """
    if console is None:
        from .console import ConsoleHelper
        console = ConsoleHelper()

    attempt = 0
    while True:
        attempt += 1
        console.prompt_user_for_input(prompt_text)

        try:
            if read_input is None:
                value = console.read_input(raise_on_eof=True)
            else:
                value = (read_input() or "").strip()
        except EOFError:
            if allow_empty:
                logger.debug(f"End of input on attempt {attempt}, no value given")
                return ""
            raise InputClosedError(prompt_text)

        if not value:
            if allow_empty:
                logger.debug(f"Empty input accepted on attempt {attempt}")
                return ""
            logger.debug(f"Empty input rejected on attempt {attempt}")
            console.print_text(format_message('empty_input'))
            continue

        if predicate(value):
            logger.debug(f"Input accepted on attempt {attempt}")
            return value

        logger.debug(f"Input rejected by {getattr(predicate, '__name__', 'predicate')} on attempt {attempt}")
        console.print_text(error_template, value)


def is_not_blank(value: str) -> bool:
    return bool(value and value.strip())


def file_exists(value: str) -> bool:
    """Check the value names an existing regular file."""
    return is_not_blank(value) and os.path.isfile(os.path.expanduser(value))


def is_absolute_url(value: str) -> bool:
    """Check the value is a well-formed absolute http(s) URL."""
    if not is_not_blank(value) or any(ch.isspace() for ch in value.strip()):
        return False

    try:
        parts = urlsplit(value.strip())
        # Accessing port validates it
        parts.port
    except ValueError:
        return False

    return parts.scheme.lower() in FEED_URL_SCHEMES and bool(parts.hostname)


def is_valid_package_id(value: str) -> bool:
    """Check the value follows the NuGet package id rules."""
    if not is_not_blank(value) or len(value) > MAX_PACKAGE_ID_LENGTH:
        return False
    return PACKAGE_ID_PATTERN.match(value) is not None


def normalize_feed_url(url: str) -> str:
    """
    Canonical absolute form of a feed URL.

    Lowercases the scheme and host and makes sure the path is at least '/'.

    Args:
        url: URL that passed is_absolute_url

    Returns:
        Normalized URL string
    """
    parts = urlsplit(url.strip())
    netloc = parts.netloc
    host = parts.hostname or ""
    # Keep any userinfo/port untouched, only the host part is case-insensitive
    if host:
        userinfo, _, hostport = netloc.rpartition('@')
        hostport = hostport.lower()
        netloc = f"{userinfo}@{hostport}" if userinfo else hostport
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))


def feed_host_url(url: str) -> str:
    """
    Scheme, host and port of a feed URL, without any path or credentials.

    Example:
        feed_host_url("https://nuget.example.com/nuget/") == "https://nuget.example.com"
    """
    parts = urlsplit(url.strip())
    # Drop any user:password@ prefix
    hostport = parts.netloc.rpartition('@')[2]
    return f"{parts.scheme.lower()}://{hostport}"
