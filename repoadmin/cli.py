"""repoadmin CLI - manage the bare git repositories under $HOME/repos."""
import argparse
import logging
import sys

from repoadmin.config import Config, ConfigError
from repoadmin.core import RepositoryRegistry, RepositoryError, RepositoryInitError

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_PARTIAL = 3
EXIT_FATAL = 4

logger = logging.getLogger(__name__)


def setup_logging(log_level: str):
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def join_words(words):
    """Gather a multi-token option value into one space-separated string."""
    if words is None:
        return None
    return ' '.join(words)


def report(result) -> int:
    """Print per-file failures of a metadata-writing operation."""
    for filename in result.failed_files:
        print(f"✗ Could not write {filename} in {result.path}", file=sys.stderr)
    return EXIT_OK if result.ok else EXIT_PARTIAL


def cmd_init(registry, args) -> int:
    """Create a new bare repository."""
    try:
        result = registry.init(
            args.name,
            section=args.section,
            description=join_words(args.description),
            owner=join_words(args.owner),
        )
    except RepositoryInitError as e:
        logger.critical(str(e), exc_info=True)
        return EXIT_FATAL

    print(f"Initialized repo '{result.path.name}'")
    return report(result)


def cmd_rename(registry, args) -> int:
    """Rename a repository."""
    result = registry.rename(args.oldname, args.newname)
    print(f"Renamed repo '{args.oldname}' to '{result.name}'")
    return report(result)


def cmd_remove(registry, args) -> int:
    """Delete a repository."""
    path = registry.remove(args.name)
    print(f"Removed repo '{path.name}'")
    return EXIT_OK


def cmd_change(registry, args) -> int:
    """Update repository metadata."""
    result = registry.change(
        args.name,
        section=args.section,
        description=join_words(args.description),
        owner=join_words(args.owner),
    )
    return report(result)


def cmd_list(registry, args) -> int:
    """List repositories."""
    if args.long:
        for info in registry.list_info():
            print('\t'.join([info.name, info.section, info.owner, info.description]))
    else:
        for name in registry.list():
            print(name)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='repoadmin',
        description='repoadmin - manage bare git repositories served by cgit/gitweb',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a repository
  %(prog)s init --name dotfiles --section personal --description My dotfiles --owner Jane Doe

  # Move it to another section
  %(prog)s change --name dotfiles --section archive

  # Show every repository with its metadata
  %(prog)s list --long
"""
    )

    # Global options
    parser.add_argument(
        '--log-level',
        default=Config.LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        help='Set the logging level (default: %(default)s)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        required=True
    )

    # init
    init_parser = subparsers.add_parser(
        'init',
        help='Create a new bare repository',
        description='Create <name>.git and write its cgit/gitweb metadata'
    )
    init_parser.add_argument('--name', required=True, help='Repository name (without .git)')
    init_parser.add_argument('--section', default='', help='cgit section')
    init_parser.add_argument('--description', nargs='+', default=[''], help='Repository description')
    init_parser.add_argument('--owner', nargs='+', default=[''], help='Repository owner')
    init_parser.set_defaults(func=cmd_init)

    # rename
    rename_parser = subparsers.add_parser(
        'rename',
        help='Rename a repository',
        description='Move <oldname>.git to <newname>.git and update its post-update hook'
    )
    rename_parser.add_argument('--oldname', required=True, help='Current repository name')
    rename_parser.add_argument('--newname', required=True, help='New repository name')
    rename_parser.set_defaults(func=cmd_rename)

    # remove
    remove_parser = subparsers.add_parser(
        'remove',
        help='Delete a repository',
        description='Recursively delete <name>.git. This cannot be undone.'
    )
    remove_parser.add_argument('--name', required=True, help='Repository name')
    remove_parser.set_defaults(func=cmd_remove)

    # change
    change_parser = subparsers.add_parser(
        'change',
        help='Change repository metadata',
        description='Overwrite only the metadata fields given on the command line'
    )
    change_parser.add_argument('--name', required=True, help='Repository name')
    change_parser.add_argument('--section', help='New cgit section')
    change_parser.add_argument('--description', nargs='+', help='New description')
    change_parser.add_argument('--owner', nargs='+', help='New owner')
    change_parser.set_defaults(func=cmd_change)

    # list
    list_parser = subparsers.add_parser(
        'list',
        help='List repositories',
        description='List repository names under $HOME/repos'
    )
    list_parser.add_argument(
        '--long',
        action='store_true',
        help='Also show section, owner and description (tab-separated)'
    )
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        root = Config.repos_root()
    except ConfigError as e:
        logger.critical(str(e))
        return EXIT_FATAL

    registry = RepositoryRegistry(root)

    try:
        return args.func(registry, args)
    except RepositoryError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_USER_ERROR
    except ValueError as e:
        # Malformed metadata values rejected by the models
        print(f"✗ Invalid value: {e}", file=sys.stderr)
        return EXIT_USER_ERROR
    except OSError as e:
        logger.critical(f"Filesystem error: {e}", exc_info=True)
        return EXIT_FATAL


if __name__ == '__main__':
    sys.exit(main())
