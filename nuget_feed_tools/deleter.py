#!/usr/bin/env python3
"""
nuget-package-deleter

Reads a comma-separated list of packages from a file and deletes each one
from a NuGet feed with ``nuget delete``, one package at a time.
"""

import logging
import os
import subprocess
import sys
import traceback
from typing import Callable, Optional

from .config import Config, get_default_config_path, load_config
from .console import ConsoleHelper
from .deletion import read_deletion_batch, run_deletions
from .exceptions import BatchFileError, ConfigurationError, InputClosedError
from .logging_config import setup_logging
from .messages import LIST_ITEM_DECORATOR, MESSAGES, format_message
from .models import DeleterConfiguration
from .validation import file_exists, is_absolute_url, is_not_blank, normalize_feed_url, prompt_until_valid

logger = logging.getLogger(__name__)


def print_initial_blurb_message(console: ConsoleHelper) -> None:
    console.print_initial_blurb_message(
        format_message('deleter_welcome'),
        format_message('deleter_blurb'),
        format_message('deleter_source_description')
    )


def gather_configuration(console: ConsoleHelper) -> DeleterConfiguration:
    """Prompt for the batch file, the feed URL and the API key, in that order."""
    batch_file = prompt_until_valid(
        format_message('enter_batch_file_prompt'),
        None,
        file_exists,
        MESSAGES['batch_file_not_found'],
        console=console
    )

    feed_url = prompt_until_valid(
        format_message('enter_feed_url_prompt'),
        None,
        is_absolute_url,
        MESSAGES['invalid_feed_url'],
        console=console
    )

    api_key = prompt_until_valid(
        format_message('enter_api_key_prompt'),
        None,
        is_not_blank,
        MESSAGES['empty_input'],
        console=console
    )
    console.print_empty_line()

    return DeleterConfiguration(
        batch_file=os.path.expanduser(batch_file),
        feed_url=normalize_feed_url(feed_url),
        api_key=api_key
    )


def run(console: ConsoleHelper, config: Optional[Config] = None, runner: Callable = subprocess.run) -> int:
    """
    Run the deleter flow.

    Args:
        console: Console used for all prompts and output
        config: Loaded configuration (defaults when None)
        runner: Callable with the subprocess.run signature used for each delete

    Returns:
        0 when the batch was processed, 1 when the run halted
    """
    config = config or Config()

    print_initial_blurb_message(console)
    run_config = gather_configuration(console)

    try:
        batch = read_deletion_batch(run_config.batch_file)
    except BatchFileError as e:
        logger.error(f"Could not read batch file: {e}")
        console.print_exception_then_halt(e, traceback.format_exc())
        return 1

    if not len(batch):
        console.print_error_message_then_halt(MESSAGES['empty_batch'], run_config.batch_file)
        return 1

    console.print_list(batch, LIST_ITEM_DECORATOR)
    console.print_text_surrounded_by_horizontal_rules(MESSAGES['batch_summary'], len(batch), run_config.batch_file)

    feed_host_url = run_config.feed_host_url
    run_deletions(batch, feed_host_url, run_config.api_key, runner=runner, config=config.deletion, console=console)

    console.print_empty_line()
    console.print_text_followed_by_horizontal_rule(MESSAGES['deletion_summary'], len(batch), feed_host_url)
    console.wait_for_acknowledgement()
    return 0


def main() -> int:
    """Console entry point for nuget-package-deleter."""
    try:
        config = load_config(get_default_config_path())
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, config.logging.log_file, config.logging.verbose)
    console = ConsoleHelper.from_config(config.console)

    try:
        return run(console, config)
    except InputClosedError as e:
        console.print_empty_line()
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.print_empty_line()
        logger.info("nuget-package-deleter interrupted")
        return 130
    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        console.print_exception_then_halt(e, traceback.format_exc())
        return 1


if __name__ == '__main__':
    sys.exit(main())
