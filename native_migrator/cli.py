"""Command-line interface for native migrator."""

import sys
import argparse
from pathlib import Path
from typing import Optional

from . import constants
from .__version__ import __version__
from .core.file_patcher import FilePatcher
from .core.migrator import Migrator, MigrationError
from .utils.backup import cleanup_old_backups, list_backups, restore_backup
from .utils.colors import Colors
from .utils.config import Config, create_default_config, ConfigValidationError
from .utils.logging import configure_logging

INSTALL_QUESTION = (
    "Would you like the migrator to run npm, yarn, pnpm, or bun install to install the "
    "latest versions of the packages? (Those using other package managers should answer N)\n"
    "Run Dependency Install?"
)


def load_and_validate_config(
    config_path: Optional[Path] = None,
    validate: bool = True,
    verbose: bool = False,
) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        config_path: Explicit config file (default: ./.native-migrator.yml)
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file(config_path)

    if validate:
        errors, warnings = config.validate()

        if verbose and warnings:
            for warning in warnings:
                print(f"{Colors.warning('!')}  Config warning: {warning}")

        if errors:
            print(f"{Colors.error('x')} Configuration errors:")
            for error in errors:
                print(f"   • {error}")
            raise ConfigValidationError(errors)

    return config


def prompt_yes_no(message: str, default: bool = True) -> bool:
    """Ask a (Y/n) question on stdin."""
    suffix = '(Y/n)' if default else '(y/N)'
    try:
        answer = input(f"{message} {suffix} ").strip().lower()
    except EOFError:
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')


def prompt_package_manager(default: str = 'npm') -> str:
    """Ask which package manager the project uses."""
    choices = ', '.join(constants.PACKAGE_MANAGERS)
    try:
        answer = input(f"What dependency manager do you use? [{choices}] ({default}) ").strip().lower()
    except EOFError:
        return default
    if answer in constants.PACKAGE_MANAGERS:
        return answer
    return default


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / constants.CONFIG_FILE_NAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('x')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return 1

    config = create_default_config(args.root)
    config.save(config_path)

    print(f"{Colors.success('✓')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {constants.CONFIG_FILE_NAME} to match your project layout")
    print(f"2. Run: native-migrator migrate --dry-run")

    return 0


def cmd_migrate(args):
    """Run the migration."""
    configure_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_and_validate_config(
            Path(args.config) if args.config else None,
            verbose=args.verbose,
        )
    except ConfigValidationError:
        return 1

    migrator = Migrator(
        config,
        package_manager=args.package_manager,
        dry_run=args.dry_run,
        use_threads=not args.no_threads,
        backup=False if args.no_backup else None,
    )

    def confirm(message: str) -> bool:
        print(message)
        return prompt_yes_no("Are you sure you want to migrate?")

    def choose_install(default: str) -> Optional[str]:
        if not prompt_yes_no(INSTALL_QUESTION):
            return None
        return args.package_manager or prompt_package_manager(default)

    if args.dry_run:
        print(f"{Colors.info('[DRY RUN - No changes will be made]')}\n")

    interactive = not args.yes and not args.skip_install
    try:
        result = migrator.run(
            confirm=None if args.yes else confirm,
            run_install=not args.skip_install,
            choose_install=choose_install if interactive else None,
        )
    except MigrationError as e:
        print(f"{Colors.error('x')} {e}")
        return 1

    if migrator.context is not None and args.verbose:
        migrator.context.patcher.print_summary()

    if result.backup_dir:
        print(f"\nBackup: {result.backup_dir}")

    return 0 if result.complete else 1


def cmd_replace(args):
    """Replace the text between two markers in a file."""
    configure_logging()
    patcher = FilePatcher(dry_run=args.dry_run)
    if not patcher.update_file(Path(args.file), args.start, args.end, args.value):
        return 1
    print(f"{Colors.success('✓')} Patched: {args.file}")
    return 0


def cmd_strip(args):
    """Remove the braced block opened by a marker line."""
    configure_logging()
    patcher = FilePatcher(dry_run=args.dry_run)
    if not patcher.update_file(Path(args.file), args.marker, '', None):
        return 1
    print(f"{Colors.success('✓')} Removed block {args.marker!r} from {args.file}")
    return 0


def cmd_backups(args):
    """List, restore or clean up backups."""
    configure_logging()
    try:
        config = load_and_validate_config(Path(args.config) if args.config else None)
    except ConfigValidationError:
        return 1

    root = config.root

    if args.restore:
        backup_dir = root / args.restore
        return 0 if restore_backup(backup_dir, root) else 1

    if args.cleanup is not None:
        removed = cleanup_old_backups(root, args.cleanup)
        print(f"{Colors.success('✓')} Removed {len(removed)} backup(s)")
        return 0

    backups = list_backups(root)
    if not backups:
        print("No backups found")
        return 0

    print(f"{Colors.bold('Backups')} (newest first):")
    for backup in backups:
        print(f"   {backup.name}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='native-migrator',
        description='Migrate hybrid app native projects between framework major versions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Initialize configuration file')
    init_parser.add_argument('--root', default='.', help='Project root (default: .)')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # migrate command
    migrate_parser = subparsers.add_parser('migrate', help='Migrate native projects to the next major')
    migrate_parser.add_argument('--config', metavar='PATH', help='Config file')
    migrate_parser.add_argument('--yes', '-y', action='store_true', help='Do not prompt, assume yes')
    migrate_parser.add_argument('--package-manager', choices=constants.PACKAGE_MANAGERS,
                                help='Dependency manager to install with')
    migrate_parser.add_argument('--skip-install', action='store_true', help='Only update package.json')
    migrate_parser.add_argument('--dry-run', action='store_true', help='Preview changes only')
    migrate_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')
    migrate_parser.add_argument('--no-threads', action='store_true', help='Patch plugins one at a time')
    migrate_parser.add_argument('--verbose', '-v', action='store_true', help='Show detailed output')
    migrate_parser.add_argument('--quiet', '-q', action='store_true', help='Warnings and errors only')
    migrate_parser.add_argument('--log-file', metavar='PATH', help='Also log to file')

    # replace command
    replace_parser = subparsers.add_parser('replace', help='Replace text between two markers in a file')
    replace_parser.add_argument('file', help='File to patch')
    replace_parser.add_argument('--start', '-s', required=True, help='Start marker')
    replace_parser.add_argument('--end', '-e', required=True, help='End marker')
    replace_parser.add_argument('--value', required=True, help='Replacement text')
    replace_parser.add_argument('--dry-run', action='store_true', help='Preview only')

    # strip command
    strip_parser = subparsers.add_parser('strip', help='Remove a brace-delimited block from a file')
    strip_parser.add_argument('file', help='File to patch')
    strip_parser.add_argument('--marker', '-m', required=True, help='Text on the opening line of the block')
    strip_parser.add_argument('--dry-run', action='store_true', help='Preview only')

    # backups command
    backups_parser = subparsers.add_parser('backups', help='Manage migration backups')
    backups_parser.add_argument('--config', metavar='PATH', help='Config file')
    backups_parser.add_argument('--list', action='store_true', help='List backups (default)')
    backups_parser.add_argument('--restore', metavar='NAME', help='Restore a backup')
    backups_parser.add_argument('--cleanup', type=int, metavar='N', help='Keep only the N most recent backups')

    args = parser.parse_args(argv)

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'migrate':
        return cmd_migrate(args)
    elif args.command == 'replace':
        return cmd_replace(args)
    elif args.command == 'strip':
        return cmd_strip(args)
    elif args.command == 'backups':
        return cmd_backups(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
