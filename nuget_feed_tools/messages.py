"""
User-facing message templates shared by the lister and deleter.

Templates use positional ``{0}`` placeholders and are read-only; callers fill
them through :func:`format_message` or ``ConsoleHelper.print_text``.
"""

from types import MappingProxyType
from typing import Mapping

HORIZONTAL_RULE_CHAR = "="
LIST_ITEM_DECORATOR = "\r\n * "

# Flags the lister mirrors from `nuget list`
LISTER_FLAGS = ("-AllVersions", "-IncludeDelisted", "-PreRelease")

_FEED_SOURCE_DESCRIPTION = (
    "The URL that you enter should be in the form of: 'https://<domain>.<gTLD>/nuget/' or\r\n"
    "'https://nuget.<domain>.<gTLD>/nuget/' without the quotes. Your URL\r\n"
    "feed may have something different on the end like '/api/packages/'. to find the URL for your package feed visit the\r\n"
    "base URL (without /nuget/) and it should be listed under the Repository URLs section"
)

_TEMPLATES = {
    # Shared
    'restart_application': "Please restart the application and try again.",
    'exception': "A {0} was thrown\r\nThe message was: {1}\r\nStacktrace: {2}",
    'invalid_feed_url': "The provided package feed URL \r\n'{0}'\r\nis not valid.",
    'empty_input': "A value is required, please try again.",
    'attempting_to_contact_server': "Attempting to contact the server via '{0}'...",
    'successfully_contacted_server': "Successfully contacted the server using the URL provided",
    'feed_unreachable': "The server at the following feed url could not be found:\r\n'{0}'",
    'press_enter_to_exit': "Press enter to exit.",
    'feed_source_description': _FEED_SOURCE_DESCRIPTION,

    # Lister
    'lister_welcome': "Welcome to nuget-package-lister!",
    'lister_blurb': (
        "This tool will allow you to specify a NuGet package feed to view the packages for. It was built to support NuGet\r\n"
        "Server 2.8\r\n\r\n"
        "If you have a different version it may not work for you. It uses the `list` argument from \r\n"
        "https://docs.microsoft.com/en-us/nuget/tools/nuget-exe-cli-reference#list with the following flags set: "
        "{0}"
    ),
    'enter_feed_url_prompt': "Please enter the URL of the NuGet package feed that you would like to access:",
    'enter_package_id_filter_prompt': (
        "If you only wish to return results for a specific package, please enter the package id now. Otherwise, press enter."
    ),
    'invalid_package_id': "The provided package id \r\n'{0}'\r\nis not valid.",
    'no_package_id_entered': "No package id has been entered, all packages will be returned.",
    'package_id_specified': "Only packages with an id that matches '{0}' will be returned.",
    'attempting_to_find_packages': "Attempting to find packages...",
    'no_packages_found_at_feed_url': "No packages were found at the following feed url:\r\n'{0}'",
    'number_of_packages_found': "{0} package/s were found.",
    'output_log_summary': "A text and a csv file containing the results have been outputted to:\r\n'{0}'.",

    # Deleter
    'deleter_welcome': "Welcome to nuget-package-deleter!",
    'deleter_blurb': (
        "This tool will allow you to specify NuGet packages, and their versions that you would like to remove from a\r\n"
        "specified NuGet feed. It was built to support NuGet Server 2.8. If you have a different version it may not work\r\n"
        "for you. It uses the `delete` command from nuget.exe, one package at a time.\r\n"
        "See https://docs.microsoft.com/en-us/nuget/reference/cli-reference/cli-ref-delete for more information."
    ),
    'deleter_source_description': (
        "The input file should list package ids separated by commas, one or more per line. An entry may carry its\r\n"
        "version after a space, e.g. 'My.Package 1.0.0', which is the format written by nuget-package-lister."
    ),
    'enter_batch_file_prompt': "Please enter the path of the file containing the packages that you would like to delete:",
    'batch_file_not_found': "The provided file path \r\n'{0}'\r\ncould not be found.",
    'enter_api_key_prompt': "Please enter the API key for the NuGet package feed:",
    'batch_summary': "{0} package entry/entries were read from '{1}'.",
    'empty_batch': "No package entries were found in the following file:\r\n'{0}'",
    'deleting_package': "Deleting '{0}' ({1} of {2}) from '{3}'...",
    'deletion_summary': "Finished processing {0} package entry/entries against '{1}'.",
}

MESSAGES: Mapping[str, str] = MappingProxyType(_TEMPLATES)


def format_message(key: str, *args) -> str:
    """
    Fill a message template.

    Args:
        key: Message key in MESSAGES
        *args: Positional values for the template placeholders

    Returns:
        The formatted message

    Raises:
        KeyError: If the key is not a known message
    """
    template = MESSAGES[key]
    return template.format(*args) if args else template


def lister_blurb() -> str:
    """Lister introduction with the mirrored `nuget list` flags appended."""
    flags = f"{LIST_ITEM_DECORATOR}{LIST_ITEM_DECORATOR.join(LISTER_FLAGS)}"
    return format_message('lister_blurb', flags)
