"""Namespace migration for Android plugins installed in node_modules."""

import json
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor

from ..core.context import MigrationContext
from ..core.file_patcher import read_text
from ..platforms.android import move_package_to_namespace
from ..utils.logging import get_logger

logger = get_logger().get_logger(__name__)


@dataclass
class PluginInfo:
    """An installed package that ships Android sources."""
    id: str
    version: str
    root: Path
    android_src: str

    @property
    def build_gradle_path(self) -> Path:
        return self.root / self.android_src / 'build.gradle'

    @property
    def manifest_path(self) -> Path:
        return self.root / self.android_src / 'src' / 'main' / 'AndroidManifest.xml'


def read_plugin(root: Path, package_id: str) -> Optional[PluginInfo]:
    """Return PluginInfo for node_modules/<package_id>, None if it has no Android sources."""
    package_dir = Path(root) / 'node_modules' / package_id
    package_json_path = package_dir / 'package.json'
    if not package_json_path.exists():
        return None

    try:
        data = json.loads(package_json_path.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Unable to read %s: %s", package_json_path, e)
        return None

    android_src = ((data.get('capacitor') or {}).get('android') or {}).get('src')
    if not android_src:
        return None

    return PluginInfo(
        id=package_id,
        version=data.get('version', ''),
        root=package_dir,
        android_src=android_src,
    )


def discover_android_plugins(root: Path, dependencies: Dict[str, str]) -> List[PluginInfo]:
    """Return the declared dependencies that are Android plugins."""
    plugins = []
    for package_id in sorted(dependencies):
        plugin = read_plugin(root, package_id)
        if plugin is not None:
            plugins.append(plugin)
    return plugins


def patch_plugin(plugin: PluginInfo, context: MigrationContext) -> bool:
    """Move the plugin's manifest package to build.gradle if it has no namespace yet."""
    if not plugin.build_gradle_path.exists() or not plugin.manifest_path.exists():
        return False

    gradle_content = read_text(plugin.build_gradle_path)
    if gradle_content is None or 'namespace' in gradle_content:
        return False

    versions = context.config.versions
    if plugin.id in context.config.dependencies.plugins:
        logger.warning(
            "You are using an outdated version of %s, update the plugin to version %s",
            plugin.id,
            versions.plugin,
        )
    else:
        logger.warning(
            "%s@%s doesn't officially support %s yet, doing our best moving its package to build.gradle so it builds",
            plugin.id,
            plugin.version,
            versions.core,
        )

    return move_package_to_namespace(plugin.manifest_path, plugin.build_gradle_path, dry_run=context.dry_run)


def patch_old_plugins(context: MigrationContext) -> List[str]:
    """
    Patch every Android plugin lacking a namespace.

    Plugins touch disjoint files, so they are processed concurrently when
    context.use_threads is set.

    Returns:
        Ids of the patched plugins
    """
    plugins = discover_android_plugins(context.root, context.dependencies)
    if not plugins:
        return []

    if context.use_threads and len(plugins) > 1:
        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda p: patch_plugin(p, context), plugins))
    else:
        results = [patch_plugin(p, context) for p in plugins]

    return [plugin.id for plugin, patched in zip(plugins, results) if patched]
