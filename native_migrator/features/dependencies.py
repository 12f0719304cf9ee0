"""package.json version bumps, dependency install and breaking change notes."""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .. import constants
from ..core.context import MigrationContext
from ..core.file_patcher import read_text
from ..utils.commands import run_command
from ..utils.logging import get_logger

logger = get_logger().get_logger(__name__)


def load_package_json(root: Path) -> Optional[Dict[str, Any]]:
    """Load <root>/package.json, None if missing or invalid."""
    text = read_text(Path(root) / 'package.json')
    if text is None:
        return None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid package.json in %s: %s", root, e)
        return None


def collect_dependencies(package_json: Dict[str, Any]) -> Dict[str, str]:
    """Merge dependencies and devDependencies (devDependencies win on conflict)."""
    dependencies: Dict[str, str] = {}
    dependencies.update(package_json.get('dependencies') or {})
    dependencies.update(package_json.get('devDependencies') or {})
    return dependencies


def get_core_version(root: Path, dependencies: Dict[str, str]) -> Optional[str]:
    """
    Return the framework core version of the project.

    The installed package wins over the range declared in package.json.
    """
    installed = Path(root) / 'node_modules' / constants.CORE_PACKAGE / 'package.json'
    if installed.exists():
        try:
            return json.loads(installed.read_text(encoding='utf-8')).get('version')
        except (OSError, json.JSONDecodeError) as e:
            logger.debug("Unable to read %s: %s", installed, e)

    return dependencies.get(constants.CORE_PACKAGE)


def bump_package_versions(
    package_json: Dict[str, Any],
    libs: Iterable[str],
    plugins: Iterable[str],
    core_version: str,
    plugin_version: str,
) -> List[str]:
    """
    Set framework libraries and official plugins to the target ranges.

    Args:
        package_json: Parsed package.json (modified in place)
        libs: Core library package names
        plugins: Official plugin package names
        core_version: Range for core libraries
        plugin_version: Range for plugins

    Returns:
        Names of the packages that were changed
    """
    libs = set(libs)
    plugins = set(plugins)
    changed = []

    for section in ('devDependencies', 'dependencies'):
        entries = package_json.get(section) or {}
        for name in entries:
            if name in libs:
                target = core_version
            elif name in plugins:
                target = plugin_version
            else:
                continue
            if entries[name] != target:
                entries[name] = target
                changed.append(name)

    return changed


def remove_installed_framework_modules(root: Path) -> List[Path]:
    """Delete node_modules/@capacitor/* except the CLI, which is running the install."""
    scope_dir = Path(root) / 'node_modules' / '@capacitor'
    if not scope_dir.is_dir():
        return []

    removed = []
    for module_dir in scope_dir.iterdir():
        if module_dir.name == 'cli' or not module_dir.is_dir():
            continue
        shutil.rmtree(module_dir)
        removed.append(module_dir)
    return removed


def install_latest_libs(context: MigrationContext, run_install: bool) -> List[str]:
    """
    Rewrite package.json with the target versions and optionally install them.

    Raises:
        CommandError: If the package manager fails
    """
    package_json_path = context.path('package.json')
    package_json = load_package_json(context.root)
    if package_json is None:
        return []

    versions = context.config.versions
    deps_config = context.config.dependencies
    changed = bump_package_versions(
        package_json,
        deps_config.libs,
        deps_config.plugins,
        versions.core,
        versions.plugin,
    )
    logger.debug("Updated %d package(s): %s", len(changed), ', '.join(changed))

    context.patcher.write_text(package_json_path, json.dumps(package_json, indent=2, ensure_ascii=False))

    if not run_install:
        logger.info("Please run an install command with your package manager of choice. (ex: yarn install)")
        return changed

    if context.dry_run:
        get_logger().dry_run("Would run %s install", context.package_manager)
        return changed

    manager = context.package_manager
    remove_installed_framework_modules(context.root)
    run_command(manager, ['install'], cwd=context.root)
    run_command(manager, ['upgrade' if manager == 'yarn' else 'update'], cwd=context.root)

    return changed


def find_breaking_changes(dependencies: Dict[str, str], breaking: Iterable[str]) -> List[str]:
    """Return the packages with breaking changes that the project uses."""
    return [name for name in breaking if name in dependencies]


def write_breaking_changes(context: MigrationContext) -> List[str]:
    """Log the plugins whose breaking changes need review."""
    broken = find_breaking_changes(context.dependencies, context.config.dependencies.breaking)
    if broken:
        logger.info(
            "IMPORTANT: Review %s for breaking changes in these plugins that you use: %s.",
            constants.BREAKING_CHANGES_URL,
            ', '.join(broken),
        )
    return broken
