"""
Native Migrator
===============

Migrates the native projects of a hybrid (WebView bridge) app to the next
framework major version by rewriting Gradle, Xcode, Podfile, manifest and
package.json text in place.

Usage:
    from native_migrator import Config, Migrator

    migrator = Migrator(Config.from_file(), dry_run=True)
    result = migrator.run()
    print(f"Complete: {result.complete}")

CLI:
    native-migrator init
    native-migrator migrate --yes --package-manager yarn
    native-migrator replace ios/App/Podfile --start "platform :ios, '" --end "'" --value 14.0
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.patcher import (
    PatchError,
    MarkerNotFoundError,
    MalformedBlockError,
    replace_all_bounded,
    remove_braced_block,
    remove_braced_block_lines,
    patch_region,
)
from .core.file_patcher import FilePatcher
from .core.migrator import Migrator, MigrationError, MigrationResult

# Configuration
from .utils.config import Config

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'PatchError',
    'MarkerNotFoundError',
    'MalformedBlockError',
    'replace_all_bounded',
    'remove_braced_block',
    'remove_braced_block_lines',
    'patch_region',
    'FilePatcher',
    'Migrator',
    'MigrationError',
    'MigrationResult',
    'Config',
]
