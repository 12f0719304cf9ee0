"""Subprocess helpers for package managers, Gradle and the framework CLI."""

import subprocess
from pathlib import Path
from typing import List, Optional

from .logging import get_logger
from .versions import parse_java_version

logger = get_logger().get_logger(__name__)


class CommandError(Exception):
    """Raised when an external command fails or cannot be started."""

    def __init__(self, command: str, returncode: Optional[int] = None, output: str = ''):
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"Command not found: {command}"
        else:
            message = f"Command failed with exit code {returncode}: {command}"
        if output:
            message = f"{message}\n{output.strip()}"
        super().__init__(message)


def run_command(cmd: str, args: Optional[List[str]] = None, cwd: Optional[Path] = None) -> str:
    """
    Run a command and return its combined output.

    Args:
        cmd: Executable name or path
        args: Command arguments
        cwd: Working directory

    Returns:
        stdout and stderr of the command

    Raises:
        CommandError: On non-zero exit or missing executable
        PermissionError: If the executable is not runnable (e.g. gradlew without +x)
    """
    argv = [cmd] + list(args or [])
    command = ' '.join(argv)
    logger.debug("Running: %s%s", command, f" (in {cwd})" if cwd else '')

    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        raise CommandError(command)

    if result.returncode != 0:
        raise CommandError(command, result.returncode, result.stdout or '')

    return result.stdout or ''


def get_java_major_version() -> int:
    """Return the installed JDK major version, 0 when java is unavailable."""
    try:
        output = run_command('java', ['-version'])
    except (CommandError, PermissionError) as e:
        logger.debug("Unable to determine JDK version: %s", e)
        return 0
    return parse_java_version(output)
