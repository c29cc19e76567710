#!/usr/bin/env python3
"""
nuget-package-lister

Lists the packages available at a NuGet feed, optionally limited to a single
package id, prints them and writes them to a text and a csv file in the
output directory.
"""

import logging
import os
import sys
import traceback
from datetime import datetime
from typing import Optional

import requests

from .config import Config, get_default_config_path, load_config
from .console import ConsoleHelper
from .exceptions import ConfigurationError, ExportError, InputClosedError
from .export import build_base_name, export
from .feed.prober import probe
from .feed.query import query
from .feed.repository import PackageRepository, create_repository
from .logging_config import setup_logging
from .messages import LIST_ITEM_DECORATOR, MESSAGES, format_message, lister_blurb
from .models import FeedResult, FeedStatus, ListerConfiguration
from .validation import is_absolute_url, is_valid_package_id, normalize_feed_url, prompt_until_valid

logger = logging.getLogger(__name__)


def print_initial_blurb_message(console: ConsoleHelper) -> None:
    console.print_initial_blurb_message(
        format_message('lister_welcome'),
        lister_blurb(),
        format_message('feed_source_description')
    )


def print_package_id_filtering_message(console: ConsoleHelper, package_id: str) -> None:
    if not package_id:
        console.print_text(format_message('no_package_id_entered'))
    else:
        console.print_empty_line()
        console.print_text(MESSAGES['package_id_specified'], package_id)

    console.print_padded_text()
    console.print_text(format_message('attempting_to_find_packages'))


def halt_on_feed_failure(console: ConsoleHelper, result: FeedResult, feed_url: str) -> None:
    """Show the halt message matching a failed probe or query."""
    restart = format_message('restart_application')

    if result.status == FeedStatus.UNREACHABLE:
        console.print_error_message_then_halt(f"{MESSAGES['feed_unreachable']} {restart}", feed_url)
    else:
        console.print_error_message_then_halt(
            f"{format_message('exception', result.error_kind, result.error_message, result.error_detail or '')} {restart}"
        )


def gather_configuration(console: ConsoleHelper, config: Config,
                         session: Optional[requests.Session] = None) -> Optional[ListerConfiguration]:
    """
    Prompt for the feed URL, check the feed answers and prompt for the id filter.

    Returns:
        ListerConfiguration, or None when the feed could not be reached
    """
    feed_url = prompt_until_valid(
        format_message('enter_feed_url_prompt'),
        None,
        is_absolute_url,
        MESSAGES['invalid_feed_url'],
        console=console
    )
    feed_url = normalize_feed_url(feed_url)
    console.print_empty_line()

    console.print_text(MESSAGES['attempting_to_contact_server'], feed_url)
    probe_result = probe(feed_url, session=session, timeout=config.feed.timeout)
    if not probe_result.is_success:
        halt_on_feed_failure(console, probe_result, feed_url)
        return None

    console.print_text(format_message('successfully_contacted_server'))

    package_id = prompt_until_valid(
        format_message('enter_package_id_filter_prompt'),
        None,
        is_valid_package_id,
        MESSAGES['invalid_package_id'],
        console=console,
        allow_empty=True
    )

    return ListerConfiguration(feed_url=feed_url, package_id=package_id)


def run(console: ConsoleHelper, config: Optional[Config] = None, session: Optional[requests.Session] = None,
        repository: Optional[PackageRepository] = None, now: Optional[datetime] = None) -> int:
    """
    Run the lister flow.

    Args:
        console: Console used for all prompts and output
        config: Loaded configuration (defaults when None)
        session: Optional requests session shared by the probe and the query
        repository: Optional repository to query instead of the feed's own
        now: Optional timestamp for the export file names

    Returns:
        0 when the package list was written, 1 when the run halted
    """
    config = config or Config()

    # One session serves the probe and the query; close it only if it is ours
    owns_session = session is None
    if owns_session:
        session = requests.Session()

    try:
        return _list_packages(console, config, session, repository, now)
    finally:
        if owns_session:
            session.close()


def _list_packages(console: ConsoleHelper, config: Config, session: requests.Session,
                   repository: Optional[PackageRepository], now: Optional[datetime]) -> int:
    print_initial_blurb_message(console)

    run_config = gather_configuration(console, config, session)
    if run_config is None:
        return 1

    print_package_id_filtering_message(console, run_config.package_id)

    if repository is None:
        repository = create_repository(run_config.feed_url, config.feed, session=session)

    result = query(run_config.feed_url, run_config.query_filter, repository=repository)
    if not result.is_success:
        halt_on_feed_failure(console, result, run_config.feed_url)
        return 1

    if not result.packages:
        console.print_error_message_then_halt(MESSAGES['no_packages_found_at_feed_url'], run_config.feed_url)
        return 1

    entries = [package.display_name for package in result.packages]
    console.print_list(entries, LIST_ITEM_DECORATOR)
    console.print_text_surrounded_by_horizontal_rules(MESSAGES['number_of_packages_found'], len(entries))

    output_dir = os.path.abspath(os.path.expanduser(config.export.output_dir or os.getcwd()))
    base_name = build_base_name(run_config.package_id, now)

    try:
        paths = export(result.packages, output_dir, base_name)
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        console.print_exception_then_halt(e, traceback.format_exc())
        return 1

    logger.info(f"Package list written to {paths.text_path} and {paths.csv_path}")
    console.print_text_followed_by_horizontal_rule(MESSAGES['output_log_summary'], output_dir)
    console.wait_for_acknowledgement()
    return 0


def main() -> int:
    """Console entry point for nuget-package-lister."""
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
        logger.info("nuget-package-lister interrupted")
        return 130
    except Exception as e:
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        console.print_exception_then_halt(e, traceback.format_exc())
        return 1


if __name__ == '__main__':
    sys.exit(main())
