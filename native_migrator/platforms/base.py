"""Base interface for native platform migrations."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Tuple

from ..core.context import MigrationContext

# (description, callable) pair run by the migrator
Task = Tuple[str, Callable[[], object]]


class BasePlatform(ABC):
    """Base class for a native platform (ios, android) of the project."""

    name: str = ''
    dependency: str = ''

    def __init__(self, context: MigrationContext):
        self.context = context
        self.config = context.config
        self.patcher = context.patcher

    @property
    @abstractmethod
    def platform_dir(self) -> Path:
        """Root directory of the native project."""
        pass

    @abstractmethod
    def get_tasks(self) -> List[Task]:
        """Return the migration tasks of this platform, in order."""
        pass

    @abstractmethod
    def files_to_backup(self) -> List[Path]:
        """Return the files this platform's tasks may modify."""
        pass

    def is_present(self) -> bool:
        """Return True if the platform package is declared and its directory exists."""
        return self.context.has_dependency(self.dependency) and self.platform_dir.exists()
