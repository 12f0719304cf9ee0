"""Utility modules."""

from .colors import Colors
from .config import Config, create_default_config
from .versions import coerce_version, version_gte, version_lt, major_version
from .backup import (
    create_backup,
    restore_backup,
    list_backups,
    cleanup_old_backups,
)

__all__ = [
    'Colors',
    'Config',
    'create_default_config',
    'coerce_version',
    'version_gte',
    'version_lt',
    'major_version',
    'create_backup',
    'restore_backup',
    'list_backups',
    'cleanup_old_backups',
]
