"""Main entry point for the repo-status CLI."""

from dotenv import load_dotenv
load_dotenv()

import os
import sys
import argparse
from typing import List, Optional

from colorama import just_fix_windows_console

from . import __version__
from .config import Config
from .core.logger import setup_logging
from .core.repo_manager import RepoManager


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='repo-status',
        description='Show a one-line git status summary for every repository under a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
State column:
  ?  untracked files        v  commits to pull from the upstream
  +  new (staged) files     ^  commits to push to the upstream
  M  modified files         -- no upstream configured

Examples:
  # Fetch and check every repository in the current directory
  repo-status

  # Check a whole tree without touching the network
  repo-status -l -d ~/src

  # Only list repositories that need attention
  repo-status -q ~/src
        """
    )

    parser.add_argument(
        'path',
        nargs='?',
        help='Directory to scan (default: current directory)'
    )
    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this help message and exit'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    scan_group = parser.add_argument_group('scan options')
    scan_group.add_argument(
        '-l', '--local',
        action='store_true',
        help='Local only: do not fetch from remotes first'
    )
    scan_group.add_argument(
        '-d', '--deep',
        action='store_true',
        help='Search the whole directory tree instead of two levels'
    )
    scan_group.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Hide clean repositories and print how many were checked'
    )

    exec_group = parser.add_argument_group('execution control')
    exec_group.add_argument(
        '-s', '--sequential',
        action='store_true',
        help='Check repositories one at a time'
    )
    exec_group.add_argument(
        '-w', '--workers',
        type=int,
        metavar='N',
        help='Maximum parallel workers (default: one per repository)'
    )

    output_group = parser.add_argument_group('output')
    output_group.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored rows (also set by NO_COLOR)'
    )
    output_group.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Log progress to stderr (repeat for debug output)'
    )
    output_group.add_argument(
        '--log-file',
        metavar='PATH',
        help='Also write log records to PATH'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        return 1

    if args.path is not None and not os.path.isdir(args.path):
        parser.error(f"not a directory: {args.path}")

    logger = setup_logging(verbosity=args.verbose, log_file=args.log_file)
    just_fix_windows_console()

    try:
        config = Config.from_env_and_args(
            path=args.path,
            deep=args.deep,
            local_only=args.local,
            quiet=args.quiet,
            sequential=args.sequential,
            max_workers=args.workers,
            no_color=args.no_color
        )

        logger.info(f"Scanning {config.root} (deep: {config.deep}, fetch: {config.fetch})")

        RepoManager(config).run()
        return 0

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Scan cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
