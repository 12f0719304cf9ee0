"""Android project migration."""

import re
import shutil
from pathlib import Path
from typing import Dict, List, Mapping, Tuple

from .. import constants
from ..core.file_patcher import read_text
from ..core.patcher import PatchError, replace_all_bounded
from ..core.template import GradleValue
from ..utils.colors import Colors
from ..utils.commands import CommandError, run_command
from ..utils.logging import get_logger
from ..utils.versions import coerce_version, version_gte, version_lt
from .base import BasePlatform, Task

logger = get_logger().get_logger(__name__)

_NAMESPACE_RE = re.compile(r'\s+namespace\s+')
_PACKAGE_RE = re.compile(r'package="([^"]+)"')


def get_gradle_wrapper_version(path: Path) -> str:
    """Return the Gradle version of gradle-wrapper.properties ('0.0.0' if unknown)."""
    text = read_text(path)
    if not text:
        return '0.0.0'

    start = text.find('gradle-')
    end = text.find('-all.zip')
    if start == -1 or end == -1 or end < start:
        return '0.0.0'

    return coerce_version(text[start + len('gradle-'):end]) or '0.0.0'


def variable_markers(name: str, value: GradleValue) -> Tuple[str, str]:
    """Return the (start, end) markers of a variables.gradle assignment."""
    if isinstance(value, int):
        return f"{name} = ", "\n"
    return f"{name} = '", "'\n"


def should_raise_variable(current: str, target: GradleValue) -> bool:
    """Return True if the declared value is lower than the template value."""
    if isinstance(target, int):
        try:
            return int(current.strip()) <= target
        except ValueError:
            return False
    return version_lt(current, target)


def move_package_to_namespace(manifest_path: Path, build_gradle_path: Path, dry_run: bool = False) -> bool:
    """
    Move `package="..."` from AndroidManifest.xml to `namespace` in build.gradle.

    Args:
        manifest_path: AndroidManifest.xml of the module
        build_gradle_path: build.gradle of the module
        dry_run: Don't write files

    Returns:
        True if both files were rewritten
    """
    manifest_text = read_text(manifest_path)
    build_gradle_text = read_text(build_gradle_path)

    if manifest_text is None:
        logger.error("Could not read %s. Check its permissions and if it exists.", manifest_path)
        return False

    if build_gradle_text is None:
        logger.error("Could not read %s. Check its permissions and if it exists.", build_gradle_path)
        return False

    if _NAMESPACE_RE.search(build_gradle_text):
        logger.error("Found namespace in %s already, skipping migration", build_gradle_path)
        return False

    match = _PACKAGE_RE.search(manifest_text)
    if match is None:
        logger.error("Unable to update %s. Package not found.", manifest_path)
        return False
    package_name = match.group(1)

    manifest_replaced = _PACKAGE_RE.sub('', manifest_text, count=1)

    try:
        build_gradle_replaced = replace_all_bounded(
            build_gradle_text,
            'android {',
            '\n',
            f'\n    namespace "{package_name}"',
            source=str(build_gradle_path),
            max_replacements=1,
        )
    except PatchError as e:
        logger.error("Unable to update %s: %s", build_gradle_path, e)
        return False

    if build_gradle_replaced == build_gradle_text:
        logger.error("Unable to update %s: no `android {` block found", build_gradle_path)
        return False

    if dry_run:
        get_logger().dry_run("Would move %s to namespace in %s", package_name, build_gradle_path)
        return True

    manifest_path.write_text(manifest_replaced, encoding='utf-8')
    build_gradle_path.write_text(build_gradle_replaced, encoding='utf-8')
    return True


class AndroidPlatform(BasePlatform):
    """Migrates the Gradle build, manifest and wrapper of the Android project."""

    name = 'android'
    dependency = constants.ANDROID_PACKAGE

    @property
    def platform_dir(self) -> Path:
        return self.context.path(self.config.project.android_dir)

    @property
    def app_dir(self) -> Path:
        return self.context.path(self.config.project.android_app_dir)

    @property
    def manifest_path(self) -> Path:
        return self.app_dir / 'src' / 'main' / 'AndroidManifest.xml'

    @property
    def build_gradle_path(self) -> Path:
        return self.platform_dir / 'build.gradle'

    @property
    def variables_gradle_path(self) -> Path:
        return self.platform_dir / 'variables.gradle'

    @property
    def wrapper_properties_path(self) -> Path:
        return self.platform_dir / 'gradle' / 'wrapper' / 'gradle-wrapper.properties'

    def files_to_backup(self) -> List[Path]:
        return [
            self.manifest_path,
            self.build_gradle_path,
            self.variables_gradle_path,
            self.wrapper_properties_path,
        ]

    def update_android_manifest(self) -> bool:
        """Add `navigation` to the main activity configChanges."""
        text = read_text(self.manifest_path)
        if text is None:
            return False

        if 'navigation' in text:
            logger.debug("%s already handles navigation changes", self.manifest_path)
            return False

        replaced = text.replace(constants.OLD_CONFIG_CHANGES, constants.NEW_CONFIG_CHANGES)
        if replaced == text:
            logger.warning("Default configChanges not found in %s. Add `navigation` manually", self.manifest_path)
            return False

        return self.patcher.write_text(self.manifest_path, replaced)

    def update_gradle_wrapper(self) -> bool:
        """
        Upgrade the Gradle wrapper to the target version.

        gradlew runs twice because the first run only updates
        gradle-wrapper.properties.
        """
        target = self.config.versions.gradle
        current = get_gradle_wrapper_version(self.wrapper_properties_path)

        if self.context.install_failed or not version_gte(target, current):
            logger.warning("Skipped upgrading gradle wrapper files")
            return False

        if self.context.dry_run:
            get_logger().dry_run("Would upgrade gradle wrapper %s -> %s", current, target)
            return True

        args = ['wrapper', '--distribution-type', 'all', '--gradle-version', target, '--warning-mode', 'all']
        try:
            for _ in range(2):
                run_command('./gradlew', args, cwd=self.platform_dir)
        except PermissionError:
            platform_dir = self.config.project.android_dir
            logger.error(
                "gradlew file does not have executable permissions. This can happen if the Android "
                "platform was added on a Windows machine. Please run %s and %s to update the files manually",
                Colors.command(f"chmod +x ./{platform_dir}/gradlew"),
                Colors.command(f"cd {platform_dir} && ./gradlew {' '.join(args)}"),
            )
            return False
        except CommandError as e:
            logger.error("gradle wrapper files were not updated")
            logger.debug("%s", e)
            return False

        return True

    def update_build_gradle(self, classpaths: Mapping[str, str]) -> bool:
        """Raise classpath dependency versions that are older than the template's."""
        text = read_text(self.build_gradle_path)
        if text is None:
            return False

        replaced = text
        for dep, version in classpaths.items():
            start = f"classpath '{dep}:"
            index = replaced.find(start)
            if index == -1:
                continue

            first = index + len(start)
            existing = replaced[first:replaced.find("'", first)]
            if not version_gte(version, existing):
                logger.debug("Keeping %s = %s (newer than %s)", dep, existing, version)
                continue

            try:
                replaced = replace_all_bounded(replaced, start, "'", version, source=str(self.build_gradle_path))
            except PatchError as e:
                logger.error("%s. Try updating it manually", e)
                return False
            logger.info("Set %s = %s.", dep, version)

        if replaced == text:
            return False
        return self.patcher.write_text(self.build_gradle_path, replaced)

    def update_variables_gradle(
        self,
        variables: Mapping[str, GradleValue],
        plugin_variables: Mapping[str, str],
    ) -> bool:
        """
        Bring variables.gradle up to the template values.

        Declared variables are raised when lower than the template, missing
        ones are inserted before the first closing brace, and plugin
        variables are replaced only where already declared.
        """
        path = self.variables_gradle_path
        text = read_text(path)
        if text is None:
            return False

        text = text.replace("=  '", "= '")

        for name, value in variables.items():
            start, end = variable_markers(name, value)

            if start in text:
                first = text.find(start) + len(start)
                last = text.find(end, first)
                if last == -1:
                    logger.error('Unable to find the end of "%s" in %s. Try updating it manually', name, path)
                    continue
                if should_raise_variable(text[first:last], value):
                    try:
                        text = replace_all_bounded(text, start, end, str(value), source=str(path))
                    except PatchError as e:
                        logger.error("%s. Try updating it manually", e)
            else:
                text = text.replace('}', f"    {start}{value}{end}}}", 1)

        for name, value in plugin_variables.items():
            start = f"{name} = '"
            if start in text:
                try:
                    text = replace_all_bounded(text, start, "'", str(value), source=str(path))
                except PatchError as e:
                    logger.error("%s. Try updating it manually", e)

        return self.patcher.write_text(path, text)

    def clean_build_dir(self) -> bool:
        """Remove the app build directory left by the old toolchain."""
        build_dir = self.app_dir / 'build'
        if not build_dir.exists():
            return False
        if self.context.dry_run:
            get_logger().dry_run("Would remove %s", build_dir)
            return True
        shutil.rmtree(build_dir)
        return True

    def get_tasks(self) -> List[Task]:
        template = self.context.template
        classpaths: Dict[str, str] = dict(template.classpaths) if template else {}
        variables: Dict[str, GradleValue] = dict(template.variables) if template else {}
        plugin_variables: Dict[str, str] = dict(template.plugin_variables) if template else {}

        return [
            ("Migrating AndroidManifest.xml by adding navigation to Activity configChanges.",
             self.update_android_manifest),
            ("Upgrading gradle wrapper files", self.update_gradle_wrapper),
            ("Migrating build.gradle file.", lambda: self.update_build_gradle(classpaths)),
            ("Migrating variables.gradle file.",
             lambda: self.update_variables_gradle(variables, plugin_variables)),
            ("Removing old app build directory.", self.clean_build_dir),
        ]
