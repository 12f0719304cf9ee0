"""Native platform migrations."""

from .base import BasePlatform
from .ios import IOSPlatform
from .android import AndroidPlatform

__all__ = ['BasePlatform', 'IOSPlatform', 'AndroidPlatform']
