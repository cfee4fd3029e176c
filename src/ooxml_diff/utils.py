"""
Utility functions.
"""

from typing import List, Optional

from ooxml_diff.constants import TEXT_EXTENSIONS
from ooxml_diff.diff_data import ContentKind


def path_parts(path: str) -> List[str]:
    """
    Splits an archive path into its segments. Archive paths always use forward slashes. Empty
    segments, e.g. from doubled or trailing slashes, are dropped.

    :param path: Input path.
    :return: parts of the path
    """
    return [part for part in path.split('/') if part]


def parent_path(path: str) -> Optional[str]:
    """
    :param path: Normalized archive path without leading or trailing slash.
    :return: The path without its final segment or None for root-level paths.
    """
    index = path.rfind('/')
    if index == -1:
        return None
    return path[:index]


def is_under(path: str, prefix: str) -> bool:
    """
    Checks if the path is the prefix itself or located below the prefix directory. `ab.xml` is not
    under `a`.
    """
    prefix = prefix.rstrip('/')
    return path == prefix or path.startswith(prefix + '/')


def classify_path(path: str) -> ContentKind:
    """
    Determines whether the entry at the given path is handled as text or as binary data.

    :param path: Archive path of the entry.
    :return: `ContentKind.TEXT` for extensions in `TEXT_EXTENSIONS`, `ContentKind.BINARY` otherwise.
    """
    if path.lower().endswith(TEXT_EXTENSIONS):
        return ContentKind.TEXT
    return ContentKind.BINARY
