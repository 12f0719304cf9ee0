"""Core patching and migration modules."""

from .patcher import (
    PatchError,
    MarkerNotFoundError,
    MalformedBlockError,
    replace_all_bounded,
    remove_braced_block,
    remove_braced_block_lines,
    patch_region,
)
from .file_patcher import FilePatcher, read_text

__all__ = [
    'PatchError',
    'MarkerNotFoundError',
    'MalformedBlockError',
    'replace_all_bounded',
    'remove_braced_block',
    'remove_braced_block_lines',
    'patch_region',
    'FilePatcher',
    'read_text',
]
