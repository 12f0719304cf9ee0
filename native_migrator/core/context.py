"""State shared between migration steps."""

from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from ..utils.config import Config
from .file_patcher import FilePatcher
from .template import AndroidTemplate


@dataclass
class MigrationStep:
    """Outcome of one migration step."""
    name: str
    status: str = 'done'  # done | skipped | failed
    message: str = ''


@dataclass
class MigrationContext:
    """
    Everything a migration step needs.

    The dependency map is read once from package.json and passed to each
    step through this object.
    """
    config: Config
    root: Path
    dependencies: Dict[str, str] = field(default_factory=dict)
    package_manager: str = 'npm'
    dry_run: bool = False
    use_threads: bool = True
    install_failed: bool = False
    template: Optional[AndroidTemplate] = None
    patcher: FilePatcher = field(default_factory=FilePatcher)
    steps: List[MigrationStep] = field(default_factory=list)

    def __post_init__(self):
        self.root = Path(self.root)
        self.patcher.dry_run = self.dry_run

    def has_dependency(self, name: str) -> bool:
        """Return True if package.json declares name."""
        return name in self.dependencies

    def path(self, *parts: str) -> Path:
        """Resolve a path relative to the project root."""
        return self.root.joinpath(*parts)
