"""Migration orchestration."""

import time
from pathlib import Path
from typing import Callable, List, Optional
from dataclasses import dataclass, field

from ..features import dependencies as deps
from ..features.plugins import patch_old_plugins
from ..platforms.android import AndroidPlatform
from ..platforms.ios import IOSPlatform
from ..utils.backup import cleanup_old_backups, create_backup
from ..utils.colors import Colors
from ..utils.commands import CommandError, get_java_major_version, run_command
from ..utils.config import Config
from ..utils.logging import get_logger
from ..utils.versions import major_version
from .context import MigrationContext, MigrationStep
from .patcher import PatchError
from .template import AndroidTemplate, TemplateError

logger = get_logger().get_logger(__name__)

MONOREPO_WARNING = (
    "Please note this tool is not intended for use in a mono-repo environment, "
    "migrate each app of the repository separately."
)


class MigrationError(Exception):
    """Raised when the migration cannot start or is cancelled."""


@dataclass
class MigrationResult:
    """Result of a migration run."""
    steps: List[MigrationStep] = field(default_factory=list)
    install_failed: bool = False
    backup_dir: Optional[Path] = None

    @property
    def failed_steps(self) -> List[MigrationStep]:
        return [step for step in self.steps if step.status == 'failed']

    @property
    def complete(self) -> bool:
        """True when every step ran without error and dependencies installed."""
        return not self.install_failed and not self.failed_steps


class Migrator:
    """
    Migrates a hybrid app's native projects to the next framework major.

    Steps run one after another; a failing step is recorded and logged
    and the migration continues with the next one.
    """

    def __init__(
        self,
        config: Config,
        package_manager: Optional[str] = None,
        dry_run: bool = False,
        use_threads: bool = True,
        backup: Optional[bool] = None,
    ):
        """
        Initialize migrator.

        Args:
            config: Loaded configuration
            package_manager: npm | yarn | pnpm | bun (default: from config)
            dry_run: Preview changes without writing
            use_threads: Patch plugins concurrently
            backup: Back up files before changing them (default: from config)
        """
        self.config = config
        self.package_manager = package_manager or config.dependencies.package_manager
        self.dry_run = dry_run
        self.use_threads = use_threads
        self.backup = config.backup.enabled if backup is None else backup
        self.context: Optional[MigrationContext] = None

    def prepare(self) -> MigrationContext:
        """
        Read package.json and the platform template.

        Raises:
            MigrationError: If package.json or the template can't be read
        """
        root = self.config.root
        package_json = deps.load_package_json(root)
        if package_json is None:
            raise MigrationError(f"Config data missing: no readable package.json in {root}")

        try:
            template = AndroidTemplate.load(self.config)
        except TemplateError as e:
            raise MigrationError(str(e)) from e

        self.context = MigrationContext(
            config=self.config,
            root=root,
            dependencies=deps.collect_dependencies(package_json),
            package_manager=self.package_manager,
            dry_run=self.dry_run,
            use_threads=self.use_threads,
            template=template,
        )
        return self.context

    def check_versions(self, context: MigrationContext) -> int:
        """
        Check the framework and JDK versions.

        Returns:
            Installed framework major version

        Raises:
            MigrationError: If the framework major is below the supported minimum
        """
        minimum = self.config.versions.minimum_major
        current = major_version(deps.get_core_version(context.root, context.dependencies))
        if current < minimum:
            raise MigrationError(
                f"Migrate can only be used on version {minimum} or newer, "
                f"found {current or 'unknown'}. Upgrade to {minimum} first"
            )

        jdk = get_java_major_version()
        if jdk < self.config.versions.minimum_jdk:
            logger.warning(
                "The new version requires JDK %d or higher (found %s). Some steps may fail.",
                self.config.versions.minimum_jdk,
                jdk or 'none',
            )
        return current

    def confirmation_message(self, context: MigrationContext) -> str:
        """Describe what the migration changes, for the confirmation prompt."""
        versions = self.config.versions
        sdk = context.template.variables.get('compileSdkVersion') if context.template else None
        message = f"Migrating to {versions.core} sets a deployment target of iOS {versions.ios_deployment_target}"
        if sdk:
            message += f" and Android SDK {sdk}"
        return message + '.'

    def run_task(self, description: str, task: Callable[[], object]) -> MigrationStep:
        """Run one step, logging its start and end and recording its outcome."""
        step = MigrationStep(name=description)
        get_logger().started(description)
        started = time.monotonic()
        patch_failures = self.context.patcher.failed if self.context is not None else 0

        try:
            outcome = task()
        except (PatchError, CommandError, OSError) as e:
            step.status = 'failed'
            step.message = str(e)
            get_logger().failed(description, e)
        else:
            if self.context is not None and self.context.patcher.failed > patch_failures:
                step.status = 'failed'
                step.message = "file could not be patched"
            elif outcome is False:
                step.status = 'skipped'
            elapsed = (time.monotonic() - started) * 1000
            get_logger().completed(description, elapsed)

        if self.context is not None:
            self.context.steps.append(step)
        return step

    def _backup(self, context: MigrationContext, platforms) -> Optional[Path]:
        files = [context.path('package.json')]
        for platform in platforms:
            files.extend(platform.files_to_backup())
        backup_dir = create_backup(context.root, files)
        cleanup_old_backups(context.root, self.config.backup.keep)
        return backup_dir

    def _install(self, context: MigrationContext, run_install: bool):
        manager = context.package_manager
        try:
            deps.install_latest_libs(context, run_install)
        except (CommandError, OSError):
            context.install_failed = True
            logger.error(
                "%s install failed. Try deleting node_modules folder and running %s manually.",
                manager,
                Colors.command(f"{manager} install --force"),
            )
            raise

    def _cap_sync(self, context: MigrationContext):
        if context.dry_run:
            get_logger().dry_run("Would run npx cap sync")
            return True
        run_command('npx', ['cap', 'sync'], cwd=context.root)
        return True

    def run(
        self,
        confirm: Optional[Callable[[str], bool]] = None,
        run_install: bool = True,
        choose_install: Optional[Callable[[str], Optional[str]]] = None,
    ) -> MigrationResult:
        """
        Run the whole migration.

        Args:
            confirm: Called with a description of the migration; returning
                False cancels it. None skips confirmation.
            run_install: Run the package manager after updating package.json
            choose_install: Asked after confirmation with the current package
                manager; returns the manager to install with, or None to only
                update package.json. Overrides run_install.

        Returns:
            MigrationResult

        Raises:
            MigrationError: On version mismatch, missing data or cancellation
        """
        context = self.context or self.prepare()
        self.check_versions(context)

        logger.info(MONOREPO_WARNING)

        if confirm is not None and not confirm(self.confirmation_message(context)):
            raise MigrationError("User canceled migration.")

        if choose_install is not None:
            manager = choose_install(context.package_manager)
            run_install = manager is not None
            if manager:
                context.package_manager = manager

        ios = IOSPlatform(context)
        android = AndroidPlatform(context)
        platforms = [p for p in (ios, android) if p.is_present()]

        result = MigrationResult()
        if self.backup and not self.dry_run:
            result.backup_dir = self._backup(context, platforms)

        self.run_task(
            f"Installing Latest Modules using {context.package_manager}.",
            lambda: self._install(context, run_install),
        )

        if ios.is_present():
            for description, task in ios.get_tasks():
                self.run_task(description, task)

        if not context.install_failed:
            self.run_task("Running cap sync.", lambda: self._cap_sync(context))
        else:
            logger.warning("Skipped Running cap sync.")

        if android.is_present():
            for description, task in android.get_tasks():
                self.run_task(description, task)

            if not context.install_failed:
                self.run_task(
                    "Migrating package from Manifest to build.gradle in plugins",
                    lambda: patch_old_plugins(context),
                )
            else:
                logger.warning("Skipped migrating package from Manifest to build.gradle in plugins")

        self.run_task("Writing breaking changes.", lambda: deps.write_breaking_changes(context))

        result.steps = list(context.steps)
        result.install_failed = context.install_failed

        if result.complete:
            get_logger().success(
                "Migration to %s is complete. Run and test your app!",
                self.config.versions.core,
            )
        else:
            logger.warning(
                "Migration to %s is incomplete. Check the log messages for more information.",
                self.config.versions.core,
            )

        return result
