"""Whole-file patching on top of the text primitives."""

from pathlib import Path
from typing import Dict, List, Optional

from ..utils.colors import Colors
from ..utils.logging import get_logger
from .patcher import PatchError, remove_braced_block, replace_all_bounded

logger = get_logger().get_logger(__name__)


def read_text(path: Path) -> Optional[str]:
    """
    Read a whole file as UTF-8.

    Returns:
        File contents, or None (after logging) if it is missing or unreadable
    """
    path = Path(path)
    if not path.exists():
        logger.error("Unable to find %s. Try updating it manually", path)
        return None

    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Unable to read %s. Verify it is not already open. %s", path, e)
        return None


class FilePatcher:
    """
    Applies marker-bounded edits to project files.

    Features:
    - Skip-if-not-found policy per edit
    - Dry-run mode
    - Statistics and summary
    """

    def __init__(self, dry_run: bool = False):
        """
        Initialize patcher.

        Args:
            dry_run: Preview mode without writing files
        """
        self.dry_run = dry_run
        self.applied = 0
        self.skipped = 0
        self.failed = 0
        self.touched: List[Path] = []

    def write_text(self, path: Path, text: str) -> bool:
        """Write a whole file unless in dry-run mode. A failed write counts as failed."""
        path = Path(path)
        if self.dry_run:
            get_logger().dry_run("Would write %s", path)
            return True

        try:
            path.write_text(text, encoding='utf-8')
        except OSError as e:
            logger.error("Unable to write %s: %s", path, e)
            self.failed += 1
            return False

        if path not in self.touched:
            self.touched.append(path)
        return True

    def update_file(
        self,
        path: Path,
        start: str,
        end: str,
        replacement: Optional[str] = None,
        skip_if_not_found: bool = False,
    ) -> bool:
        """
        Patch a file between markers, or remove a braced block.

        Args:
            path: File to patch
            start: Start marker
            end: End marker (ignored when removing a block)
            replacement: Text to put between the markers. None removes the
                brace-delimited block opened by start instead.
            skip_if_not_found: Don't report a missing start marker

        Returns:
            True if the file was patched
        """
        path = Path(path)
        text = read_text(path)
        if text is None:
            self.failed += 1
            return False

        if start not in text:
            if skip_if_not_found:
                logger.debug("Skipping %s: %r not present", path, start)
                self.skipped += 1
            else:
                logger.error('Unable to find "%s" in %s. Try updating it manually', start, path)
                self.failed += 1
            return False

        try:
            if replacement is not None:
                patched = replace_all_bounded(text, start, end, replacement, source=str(path))
            else:
                patched = remove_braced_block(text, start, source=str(path))
        except PatchError as e:
            logger.error("%s. Try updating it manually", e)
            self.failed += 1
            return False

        if self.dry_run:
            self._preview(path, text, patched)

        if not self.write_text(path, patched):
            return False

        self.applied += 1
        return True

    def _preview(self, path: Path, before: str, after: str):
        """Log changed lines of a dry-run edit."""
        old_lines = before.split('\n')
        new_lines = after.split('\n')
        get_logger().dry_run("%s", path)
        for line in old_lines:
            if line not in new_lines:
                logger.info("    %s", Colors.removed(line.strip()))
        for line in new_lines:
            if line not in old_lines:
                logger.info("    %s", Colors.added(line.strip()))

    def get_stats(self) -> Dict[str, int]:
        """Return patch statistics."""
        return {
            'applied': self.applied,
            'skipped': self.skipped,
            'failed': self.failed,
            'total': self.applied + self.skipped + self.failed,
        }

    def print_summary(self):
        """Print patch summary."""
        stats = self.get_stats()

        print(f"\n{'=' * 70}")
        print(f"{Colors.bold('PATCH SUMMARY')}")
        print(f"{'=' * 70}")
        print(f"Applied: {stats['applied']}")
        print(f"Skipped: {stats['skipped']}")
        print(f"Failed: {stats['failed']}")
        print(f"{'=' * 70}")
