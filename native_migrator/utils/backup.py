"""Backup utilities for safe modifications."""

import shutil
from pathlib import Path
from datetime import datetime
from typing import Iterable, List, Optional

from ..constants import BACKUP_PREFIX
from .logging import get_logger

logger = get_logger().get_logger(__name__)


def create_backup(
    project_dir: Path,
    files: Iterable[Path],
    backup_name: Optional[str] = None,
) -> Path:
    """
    Copy the files about to be migrated into a backup directory.

    Files keep their layout relative to project_dir. Files that don't exist
    or live outside project_dir are skipped.

    Args:
        project_dir: Project root directory
        files: Files to back up
        backup_name: Custom backup name (default: timestamp)

    Returns:
        Path to backup directory
    """
    if backup_name is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        backup_name = f'{BACKUP_PREFIX}{timestamp}'

    project_dir = Path(project_dir)
    backup_dir = project_dir / backup_name
    backup_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Creating backup: %s", backup_name)

    copied = 0
    for file_path in files:
        file_path = Path(file_path)
        if not file_path.is_file():
            continue
        try:
            relative_path = file_path.resolve().relative_to(project_dir.resolve())
        except ValueError:
            logger.debug("Not backing up %s (outside project)", file_path)
            continue

        dest_path = backup_dir / relative_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(file_path, dest_path)
        copied += 1

    logger.info("Backup created: %s (%d files)", backup_dir, copied)

    return backup_dir


def restore_backup(backup_dir: Path, target_dir: Path) -> bool:
    """
    Restore from backup.

    Args:
        backup_dir: Backup directory
        target_dir: Target directory to restore to

    Returns:
        Success status
    """
    if not backup_dir.exists():
        logger.error("Backup not found: %s", backup_dir)
        return False

    logger.info("Restoring from backup: %s", backup_dir.name)

    try:
        shutil.copytree(backup_dir, target_dir, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        logger.error("Restore failed: %s", e)
        return False

    logger.info("Restored successfully")
    return True


def list_backups(project_dir: Path) -> List[Path]:
    """
    List all available backups, newest first.

    Args:
        project_dir: Project directory

    Returns:
        List of backup directories
    """
    return sorted(
        (p for p in Path(project_dir).glob(f'{BACKUP_PREFIX}*') if p.is_dir()),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )


def cleanup_old_backups(project_dir: Path, keep_count: int = 5) -> List[Path]:
    """
    Remove old backups, keeping only the most recent ones.

    Args:
        project_dir: Project directory
        keep_count: Number of backups to keep

    Returns:
        Removed backup directories
    """
    backups = list_backups(project_dir)

    if len(backups) <= keep_count:
        return []

    to_remove = backups[keep_count:]

    logger.info("Cleaning up old backups (keeping %d most recent)", keep_count)

    for backup in to_remove:
        shutil.rmtree(backup)
        logger.info("Removed: %s", backup.name)

    return to_remove
