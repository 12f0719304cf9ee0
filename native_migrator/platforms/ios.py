"""iOS project migration."""

from pathlib import Path
from typing import List

from .. import constants
from .base import BasePlatform, Task


class IOSPlatform(BasePlatform):
    """Raises the deployment target of the Xcode project and the Podfile."""

    name = 'ios'
    dependency = constants.IOS_PACKAGE

    @property
    def platform_dir(self) -> Path:
        return self.context.path(self.config.project.ios_dir)

    @property
    def project_dir(self) -> Path:
        return self.context.path(self.config.project.ios_project_dir)

    @property
    def pbxproj_path(self) -> Path:
        return self.project_dir / 'App.xcodeproj' / 'project.pbxproj'

    @property
    def podfile_path(self) -> Path:
        return self.project_dir / 'Podfile'

    def files_to_backup(self) -> List[Path]:
        return [self.pbxproj_path, self.podfile_path]

    def update_deployment_target(self) -> bool:
        """Set every IPHONEOS_DEPLOYMENT_TARGET in project.pbxproj."""
        return self.patcher.update_file(
            self.pbxproj_path,
            'IPHONEOS_DEPLOYMENT_TARGET = ',
            ';',
            self.config.versions.ios_deployment_target,
        )

    def update_podfile(self) -> bool:
        """Set the `platform :ios` version in the Podfile."""
        return self.patcher.update_file(
            self.podfile_path,
            "platform :ios, '",
            "'",
            self.config.versions.ios_deployment_target,
        )

    def get_tasks(self) -> List[Task]:
        target = self.config.versions.ios_deployment_target
        return [
            (f"Migrating deployment target to {target}.", self.update_deployment_target),
            (f"Migrating Podfile to {target}.", self.update_podfile),
        ]
