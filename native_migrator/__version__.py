"""Version information for native-migrator."""

__version__ = "1.2.0"
__author__ = "Sezgin Paksoy"
__description__ = "Migrate hybrid app native projects between framework major versions"

# Changelog:
# 1.2.0 - Safer patching
#        - Missing end marker now raises MarkerNotFoundError instead of truncating
#        - Unbalanced braces raise MalformedBlockError instead of dropping the tail
#        - replace / strip commands for one-off file edits
#        - Dependency set passed explicitly through MigrationContext
#
# 1.1.0 - Android plugin namespace migration
#        - package="..." moved from AndroidManifest.xml to build.gradle namespace
#        - Plugins patched concurrently (--no-threads to disable)
#        - Backups before migration (backups --list / --restore / --cleanup)
#
# 1.0.0 - Initial release
#        - iOS deployment target and Podfile platform bump
#        - build.gradle classpath and variables.gradle bumps
#        - Gradle wrapper upgrade
#        - package.json version bump and dependency install
