#!/usr/bin/env python3
"""
Entry point for running nuget_feed_tools as a module.

    python -m nuget_feed_tools lister
    python -m nuget_feed_tools deleter
"""

import argparse
import sys

from . import deleter, lister
from .version import get_full_name_with_version

TOOLS = {
    'lister': lister.main,
    'deleter': deleter.main,
}


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='python -m nuget_feed_tools',
        description='Interactive tools for listing and deleting packages on a NuGet feed'
    )
    parser.add_argument('tool', choices=sorted(TOOLS), help='Tool to run')
    parser.add_argument('--version', action='version', version=get_full_name_with_version())
    args = parser.parse_args(argv)

    return TOOLS[args.tool]()


if __name__ == '__main__':
    sys.exit(main())
