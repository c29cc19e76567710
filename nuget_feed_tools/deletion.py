"""
Batch deletion of packages from a feed through the nuget command line.
"""

import logging
import subprocess
import time
from typing import Callable, List, Optional

from .config import DeletionConfig
from .exceptions import BatchFileError
from .messages import format_message
from .models import DeletionBatch

logger = logging.getLogger(__name__)

BATCH_DELIMITER = ","
MASKED_API_KEY = "********"


def read_deletion_batch(file_path: str) -> DeletionBatch:
    """
    Read package tokens from a comma-separated batch file.

    Every line is split on commas and every resulting token is kept, in
    order and untrimmed, including empty tokens left by trailing commas.

    Args:
        file_path: Path to the batch file

    Returns:
        DeletionBatch with the tokens in file order

    Raises:
        BatchFileError: If the file cannot be read; nothing is returned partially
    """
    tokens: List[str] = []
    try:
        with open(file_path, 'r', encoding='utf-8-sig', newline=None) as f:
            for line_number, line in enumerate(f, 1):
                line = line.rstrip('\r\n')
                line_tokens = line.split(BATCH_DELIMITER)
                logger.debug(f"Batch line {line_number}: {len(line_tokens)} token(s)")
                tokens.extend(line_tokens)
    except (OSError, UnicodeDecodeError) as e:
        raise BatchFileError(str(e), file_path=file_path)

    logger.info(f"Read {len(tokens)} package token(s) from {file_path}")
    return DeletionBatch(source_path=file_path, package_ids=tuple(tokens))


def build_delete_command(package_token: str, feed_host_url: str, api_key: str,
                         config: Optional[DeletionConfig] = None) -> List[str]:
    """
    Build the argument list for deleting one package.

    The ``{package}`` entry of the template expands to the whitespace-separated
    words of the token, so ``"My.Package 1.0.0"`` becomes the id and version
    arguments ``nuget delete`` expects. An empty or blank token is passed
    unchanged as one argument.

    Args:
        package_token: Token read from the batch file
        feed_host_url: Scheme and host of the feed
        api_key: API key for the feed
        config: Optional DeletionConfig with the executable and template

    Returns:
        Command as a list of arguments, suitable for subprocess with shell=False
    """
    config = config or DeletionConfig()
    values = {
        'executable': config.executable,
        'source': feed_host_url,
        'api_key': api_key,
    }

    command = []
    for part in config.command_template:
        if part == '{package}':
            # A blank token is still passed through as a single argument
            command.extend(package_token.split() or [package_token])
        else:
            command.append(part.format(**values))
    return command


def mask_api_key(command: List[str], api_key: str) -> str:
    """Render a command for logging with the API key hidden."""
    if not api_key:
        return " ".join(command)
    return " ".join(part.replace(api_key, MASKED_API_KEY) for part in command)


def run_deletions(batch: DeletionBatch, feed_host_url: str, api_key: str,
                  runner: Callable = subprocess.run, config: Optional[DeletionConfig] = None,
                  console=None) -> None:
    """
    Delete every package in the batch, one at a time.

    Each command runs to completion before the next one starts. The batch
    carries on whatever a command's exit status; exit codes are only logged.

    Args:
        batch: Package tokens to delete
        feed_host_url: Scheme and host of the feed the packages live on
        api_key: API key passed to every delete command
        runner: Callable with the subprocess.run signature
        config: Optional DeletionConfig
        console: Optional ConsoleHelper for progress lines
    """
    total = len(batch)
    logger.info(f"Starting deletion of {total} package token(s) from {feed_host_url}")

    for index, package_token in enumerate(batch, 1):
        command = build_delete_command(package_token, feed_host_url, api_key, config)

        if console is not None:
            console.print_text(format_message('deleting_package', package_token, index, total, feed_host_url))

        logger.debug(f"[{index}/{total}] Executing: {mask_api_key(command, api_key)}")
        start_time = time.time()

        try:
            process = runner(command, shell=False, check=False)
        except OSError as e:
            # The executable could not be launched; the next item is still attempted
            logger.error(f"[{index}/{total}] Could not run delete command for '{package_token}': {e}")
            continue

        duration = time.time() - start_time
        exit_code = getattr(process, 'returncode', None)
        if exit_code:
            logger.warning(f"[{index}/{total}] Delete command for '{package_token}' exited with code {exit_code}")
        else:
            logger.debug(f"[{index}/{total}] Delete command for '{package_token}' completed in {duration:.2f}s")

    logger.info(f"Finished deletion batch of {total} package token(s)")
