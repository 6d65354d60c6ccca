"""
Sequential output versioning

Documents opting into sequential output carry a two-part version in a
<!-- version-number: NN.NN --> comment. Each build names its output with
the current version and then bumps the comment in the source:

    00.00 -> 00.01 -> ... -> 00.99 -> 01.00 -> ... -> 99.99 -> 00.00
"""

import re
from typing import List, Tuple

from .extractor import directive_pattern
from .log import LOG

VERSION_PATTERN = re.compile(r'^(\d{2})\.(\d{2})$')
DEFAULT_VERSION = "00.00"


def version_parse(version: str) -> Tuple[int, int]:
    """
    Parse "NN.NN" into (major, minor); anything else is (0, 0)

    Example:
        >>> version_parse("01.07")
        (1, 7)
        >>> version_parse("1.7")
        (0, 0)
    """
    match = VERSION_PATTERN.match(version.strip())
    if not match:
        return 0, 0
    return int(match.group(1)), int(match.group(2))


def version_increment(major: int, minor: int) -> Tuple[int, int]:
    """Bump the minor part, rolling into major after 99 and wrapping after 99.99"""
    minor += 1
    if minor > 99:
        minor = 0
        major += 1
        if major > 99:
            major = 0
    return major, minor


def version_format(major: int, minor: int) -> str:
    """Format as zero-padded "NN.NN" """
    return f"{major:02d}.{minor:02d}"


def version_next(version: str) -> str:
    """
    Version following the given one

    Example:
        >>> version_next("00.99")
        '01.00'
    """
    return version_format(*version_increment(*version_parse(version)))


def versionComment_update(text: str, new_version: str) -> str:
    """
    Set the version-number comment in document text

    An existing comment is rewritten in place. Otherwise a new comment is
    inserted after the leading block of single-line comments (blank lines
    inside that block are allowed), or at the very top.

    Args:
        text: Source document text
        new_version: Version to record

    Returns:
        Updated text
    """
    comment = f"<!-- version-number: {new_version} -->"
    pattern = directive_pattern('version-number')

    if pattern.search(text):
        LOG(f"Updated version number to {new_version}", level=1)
        return pattern.sub(lambda match: comment, text, count=1)

    lines: List[str] = text.split('\n')
    insert_index = 0
    for index, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith('<!--') and stripped.endswith('-->'):
            insert_index = index + 1
        elif stripped:
            break

    lines.insert(insert_index, comment)
    LOG(f"Added version number {new_version}", level=1)
    return '\n'.join(lines)
