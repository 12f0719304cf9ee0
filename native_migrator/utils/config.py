"""Configuration management for native migrator."""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any, Tuple, Union
from dataclasses import dataclass, field, asdict

from .. import constants
from .versions import coerce_version


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ProjectConfig:
    """Project layout, relative to root."""
    root: str = "."
    ios_dir: str = "ios"
    ios_project_dir: str = "ios/App"
    android_dir: str = "android"
    android_app_dir: str = "android/app"


@dataclass
class VersionsConfig:
    """Migration targets."""
    minimum_major: int = constants.MINIMUM_MAJOR
    core: str = constants.CORE_VERSION
    plugin: str = constants.PLUGIN_VERSION
    gradle: str = constants.GRADLE_VERSION
    ios_deployment_target: str = constants.IOS_DEPLOYMENT_TARGET
    minimum_jdk: int = constants.MINIMUM_JDK


@dataclass
class AndroidConfig:
    """Android template configuration."""
    # Directory holding the new platform's variables.gradle and build.gradle
    template_dir: str = ""
    # Overrides on top of the template values
    variables: Dict[str, Union[int, str]] = field(default_factory=dict)
    classpaths: Dict[str, str] = field(default_factory=dict)
    plugin_variables: Dict[str, str] = field(default_factory=lambda: dict(constants.PLUGIN_VARIABLES))


@dataclass
class DependenciesConfig:
    """package.json handling."""
    package_manager: str = "npm"
    libs: List[str] = field(default_factory=lambda: list(constants.CORE_LIBS))
    plugins: List[str] = field(default_factory=lambda: list(constants.OFFICIAL_PLUGINS))
    breaking: List[str] = field(default_factory=lambda: list(constants.BREAKING_PLUGINS))


@dataclass
class BackupConfig:
    """Backup configuration."""
    enabled: bool = True
    keep: int = 5


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    versions: VersionsConfig = field(default_factory=VersionsConfig)
    android: AndroidConfig = field(default_factory=AndroidConfig)
    dependencies: DependenciesConfig = field(default_factory=DependenciesConfig)
    backup: BackupConfig = field(default_factory=BackupConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from YAML file.

        Relative `project.root` and `android.template_dir` values are taken
        relative to the directory holding the file.
        """
        if config_path is None:
            config_path = Path.cwd() / constants.CONFIG_FILE_NAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            project=ProjectConfig(**data.get('project', {})),
            versions=VersionsConfig(**data.get('versions', {})),
            android=AndroidConfig(**data.get('android', {})),
            dependencies=DependenciesConfig(**data.get('dependencies', {})),
            backup=BackupConfig(**data.get('backup', {})),
        )

        base_dir = Path(config_path).parent
        config.project.root = str(base_dir / config.project.root)
        if config.android.template_dir:
            config.android.template_dir = str(base_dir / config.android.template_dir)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / constants.CONFIG_FILE_NAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @property
    def root(self) -> Path:
        """Project root directory."""
        return Path(self.project.root)

    def validate(self, raise_on_error: bool = False) -> Tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not self.root.exists():
            errors.append(f"Project root does not exist: {self.project.root}")
        elif not (self.root / 'package.json').exists():
            warnings.append(ConfigValidationWarning(
                f"No package.json found in {self.project.root}"
            ))

        if self.dependencies.package_manager not in constants.PACKAGE_MANAGERS:
            errors.append(
                f"Invalid package manager '{self.dependencies.package_manager}'. "
                f"Valid options: {', '.join(constants.PACKAGE_MANAGERS)}"
            )

        for name in ('core', 'plugin', 'gradle', 'ios_deployment_target'):
            value = getattr(self.versions, name)
            if coerce_version(value) is None:
                errors.append(f"versions.{name} is not a version: '{value}'")

        if self.versions.minimum_major < 1:
            errors.append(
                f"versions.minimum_major must be positive, got {self.versions.minimum_major}"
            )

        if self.versions.minimum_jdk < 8:
            warnings.append(ConfigValidationWarning(
                f"versions.minimum_jdk looks too low: {self.versions.minimum_jdk}"
            ))

        if self.android.template_dir and not Path(self.android.template_dir).is_dir():
            errors.append(f"android.template_dir does not exist: {self.android.template_dir}")

        for name, value in self.android.variables.items():
            if not isinstance(value, (int, str)) or isinstance(value, bool):
                errors.append(f"android.variables.{name} must be a number or string")

        if self.backup.keep < 1:
            errors.append(f"backup.keep must be at least 1, got {self.backup.keep}")

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def create_default_config(root: str = '.') -> Config:
    """Create default configuration for a project root."""
    config = Config()
    config.project.root = root
    return config
