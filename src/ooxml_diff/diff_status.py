"""
Computation of the diff status of every node in a merged tree.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger

from ooxml_diff.archive_store import ArchiveStore
from ooxml_diff.diff_data import DiffStatus, MergedTreeNode
from ooxml_diff.errors import ComparisonReadError, OoxmlDiffError
from ooxml_diff.file_comparison import ContentComparer


def _read(store: ArchiveStore, path: str, side: str):
    try:
        return store.read_entry(path)
    except (OoxmlDiffError, OSError, ValueError) as error:
        raise ComparisonReadError(path, side) from error


def compare_file(node: MergedTreeNode, left: ArchiveStore, right: ArchiveStore,
                 comparer: ContentComparer) -> bool:
    """
    Compares the contents of a file present in both archives. Read failures count as a mismatch.

    :return: True if the contents are equal.
    """
    try:
        left_content = _read(left, node.path, 'left')
        right_content = _read(right, node.path, 'right')
    except ComparisonReadError as error:
        logger.warning('{}, treating the files as different: {}', error, error.__cause__)
        return False
    return comparer.equal(left_content, right_content)


def compute_node_status(node: MergedTreeNode, left: ArchiveStore, right: ArchiveStore,
                        comparer: ContentComparer) -> DiffStatus:
    """
    Computes the status of the node and, for directories, of its whole subtree first.

    :return: The status assigned to the node.
    """
    # Children are always evaluated, even below single-sided directories.
    for child in node.children or ():
        compute_node_status(child, left, right, comparer)

    if node.left_exists and not node.right_exists:
        node.status = DiffStatus.LEFT_ONLY
    elif node.right_exists and not node.left_exists:
        node.status = DiffStatus.RIGHT_ONLY
    elif node.type_conflict:
        node.status = DiffStatus.BOTH_DIFF
    elif node.is_dir:
        any_diff = any(child.status is not DiffStatus.BOTH_SAME for child in node.children)
        node.status = DiffStatus.BOTH_DIFF if any_diff else DiffStatus.BOTH_SAME
    else:
        node.contents_match = compare_file(node, left, right, comparer)
        node.status = DiffStatus.BOTH_SAME if node.contents_match else DiffStatus.BOTH_DIFF

    return node.status


def compute_diff_statuses(nodes: List[MergedTreeNode], left: ArchiveStore, right: ArchiveStore,
                          comparer: Optional[ContentComparer] = None) -> List[MergedTreeNode]:
    """
    Annotates every node of the merged tree in place with its `DiffStatus`. Files present on one
    side only are not read. Directories present on both sides are different if any descendant is
    not `BOTH_SAME`. The traversal is depth-first in sibling order and reads the left content before
    the right content of each file.

    :param nodes: Root nodes as returned by `merge_trees()`.
    :param left: Store of the left archive.
    :param right: Store of the right archive.
    :param comparer: Content comparison strategy, defaults to `ContentComparer()`.
    :return: The annotated nodes.
    """
    comparer = comparer if comparer is not None else ContentComparer()
    for node in nodes:
        compute_node_status(node, left, right, comparer)
    return nodes
