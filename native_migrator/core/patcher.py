"""Marker-bounded text patching primitives.

Both primitives are pure: they take a string and return a new string, and
report problems by raising. Reading and writing files is the job of
:mod:`native_migrator.core.file_patcher`.
"""

from typing import List, Optional

# Characters of surrounding text shown in error messages
CONTEXT_WIDTH = 40


class PatchError(Exception):
    """Base class for patching failures."""

    def __init__(self, message: str, marker: str, source: Optional[str] = None):
        self.marker = marker
        self.source = source
        if source:
            message = f"{message} in {source}"
        super().__init__(message)


class MarkerNotFoundError(PatchError):
    """Raised when a start or end delimiter is absent."""

    def __init__(self, marker: str, source: Optional[str] = None, context: str = ''):
        self.context = context
        message = f"Marker {marker!r} not found"
        if context:
            message = f"{message} after {context!r}"
        super().__init__(message, marker, source)


class MalformedBlockError(PatchError):
    """Raised when a braced block never closes before end of input."""

    def __init__(self, marker: str, depth: int, line: int, source: Optional[str] = None):
        self.depth = depth
        self.line = line
        super().__init__(
            f"Block starting at line {line} ({marker!r}) is not closed, "
            f"{depth} unmatched brace(s)",
            marker,
            source,
        )


def _context(text: str, index: int) -> str:
    """Return a short snippet of text ending at index."""
    snippet = text[max(0, index - CONTEXT_WIDTH):index]
    if index > CONTEXT_WIDTH:
        snippet = '...' + snippet
    return snippet


def replace_all_bounded(
    text: str,
    start: str,
    end: str,
    replacement: str,
    source: Optional[str] = None,
    max_replacements: Optional[int] = None,
) -> str:
    """
    Replace the text between every start marker and the next end marker.

    Both markers are kept. The scan is a single forward pass: after each
    splice the cursor moves past the inserted replacement, so every
    disjoint occurrence is visited once, left to right.

    Args:
        text: Text to patch
        start: Start marker (non-empty)
        end: End marker (non-empty), searched only after the start marker
        replacement: Text inserted verbatim between the markers
        source: Optional file identity used in error messages
        max_replacements: Stop after this many replacements

    Returns:
        Patched text (unchanged if start never occurs)

    Raises:
        ValueError: If a marker is empty
        MarkerNotFoundError: If a start marker has no end marker after it

    Example:
        >>> replace_all_bounded("version = '1.0'", "version = '", "'", "2.0")
        "version = '2.0'"
    """
    if not start or not end:
        raise ValueError("start and end markers must be non-empty")

    result = text
    position = 0
    count = 0

    while max_replacements is None or count < max_replacements:
        found = result.find(start, position)
        if found == -1:
            break

        insertion_point = found + len(start)
        end_index = result.find(end, insertion_point)
        if end_index == -1:
            raise MarkerNotFoundError(end, source, _context(result, insertion_point))

        result = result[:insertion_point] + replacement + result[end_index:]
        position = insertion_point + len(replacement)
        count += 1

    return result


def remove_braced_block_lines(
    lines: List[str],
    start_marker: str,
    source: Optional[str] = None,
) -> List[str]:
    """
    Drop the brace-delimited block that opens on a line containing start_marker.

    Braces are counted as raw characters per line, so braces inside string
    literals or comments are miscounted. A line with the marker whose braces
    balance on their own is the whole block and only that line is dropped.
    A later line containing the marker starts the scan again.

    Args:
        lines: Input lines (without line terminators)
        start_marker: Text identifying the opening line
        source: Optional file identity used in error messages

    Returns:
        Remaining lines

    Raises:
        MalformedBlockError: If the block is still open at end of input
    """
    kept: List[str] = []
    inside = False
    depth = 0
    opened_at = 0

    for number, line in enumerate(lines, 1):
        if start_marker in line:
            if not inside:
                opened_at = number
            inside = True

        if inside:
            depth += line.count('{')
            depth -= line.count('}')
            if depth == 0:
                inside = False
        else:
            kept.append(line)

    if inside:
        raise MalformedBlockError(start_marker, depth, opened_at, source)

    return kept


def remove_braced_block(text: str, start_marker: str, source: Optional[str] = None) -> str:
    """Text variant of :func:`remove_braced_block_lines` (keeps a trailing newline)."""
    trailing_newline = text.endswith('\n')
    lines = text.split('\n')
    if trailing_newline:
        lines = lines[:-1]

    result = '\n'.join(remove_braced_block_lines(lines, start_marker, source))
    if trailing_newline and result:
        result += '\n'
    return result


def patch_region(
    text: str,
    start: str,
    end: str = '',
    replacement: Optional[str] = None,
    source: Optional[str] = None,
) -> str:
    """
    Patch text, requiring the start marker to be present.

    With a replacement the bounded region is replaced; without one the
    braced block opened by start is removed and end is ignored.

    Raises:
        MarkerNotFoundError: If start does not occur in text
    """
    if start not in text:
        raise MarkerNotFoundError(start, source)

    if replacement is None:
        return remove_braced_block(text, start, source)
    return replace_all_bounded(text, start, end, replacement, source)
