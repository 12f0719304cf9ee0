"""Target values taken from the new Android platform template."""

import re
from pathlib import Path
from typing import Dict, Iterable, Union
from dataclasses import dataclass, field

from .. import constants
from ..utils.config import Config
from ..utils.logging import get_logger
from .file_patcher import read_text

logger = get_logger().get_logger(__name__)

GradleValue = Union[int, str]

_VARIABLE_RE = re.compile(r"^\s*(\w+)\s*=\s*(.+?)\s*$", re.MULTILINE)


class TemplateError(Exception):
    """Raised when the platform template cannot be read."""


def parse_variables_gradle(text: str) -> Dict[str, GradleValue]:
    """
    Parse the assignments of a variables.gradle `ext { }` block.

    Quoted values are returned as strings, bare integers as ints.
    Anything else (expressions, references) is skipped.

    Example:
        ext {
            minSdkVersion = 23
            androidxCoreVersion = '1.15.0'
        }
        -> {'minSdkVersion': 23, 'androidxCoreVersion': '1.15.0'}
    """
    variables: Dict[str, GradleValue] = {}

    for match in _VARIABLE_RE.finditer(text):
        name, raw = match.group(1), match.group(2)
        if raw[0] in '\'"' and raw[-1] == raw[0] and len(raw) >= 2:
            variables[name] = raw[1:-1]
        elif raw.isdigit():
            variables[name] = int(raw)
        else:
            logger.debug("Skipping non-literal variable %s = %s", name, raw)

    return variables


def parse_classpath_versions(text: str, deps: Iterable[str]) -> Dict[str, str]:
    """Return {dependency: version} for each `classpath '<dep>:<version>'` in text."""
    versions = {}
    for dep in deps:
        match = re.search(rf"classpath\s+['\"]{re.escape(dep)}:([^'\"]+)['\"]", text)
        if match:
            versions[dep] = match.group(1)
    return versions


@dataclass
class AndroidTemplate:
    """Variable and classpath versions of the target Android template."""
    variables: Dict[str, GradleValue] = field(default_factory=dict)
    classpaths: Dict[str, str] = field(default_factory=dict)
    plugin_variables: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, config: Config) -> 'AndroidTemplate':
        """
        Build the template from config.

        Values come from android.template_dir when set, otherwise from the
        built-in defaults. android.variables and android.classpaths
        override either source.

        Raises:
            TemplateError: If template_dir is set but its files can't be read
        """
        if config.android.template_dir:
            template_dir = Path(config.android.template_dir)
            variables_text = read_text(template_dir / 'variables.gradle')
            build_text = read_text(template_dir / 'build.gradle')
            if variables_text is None or build_text is None:
                raise TemplateError(f"Variable and classpath info could not be read from {template_dir}")

            variables = parse_variables_gradle(variables_text)
            classpaths = parse_classpath_versions(build_text, constants.TEMPLATE_CLASSPATHS)
        else:
            variables = dict(constants.TEMPLATE_VARIABLES)
            classpaths = dict(constants.TEMPLATE_CLASSPATHS)

        variables.update(config.android.variables)
        classpaths.update(config.android.classpaths)

        return cls(
            variables=variables,
            classpaths=classpaths,
            plugin_variables=dict(config.android.plugin_variables),
        )
