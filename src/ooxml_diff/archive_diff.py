"""
Two-archive diff session.
"""

from __future__ import annotations

import pathlib as pl
from dataclasses import dataclass
from typing import Dict, List, Union

from loguru import logger

from ooxml_diff.archive_store import ArchiveStore
from ooxml_diff.canonicalize import format_for_display
from ooxml_diff.constants import CRITICAL_PARTS
from ooxml_diff.diff_data import ContentKind, DiffStatus, MergedTreeNode, diff_stats
from ooxml_diff.diff_status import compute_diff_statuses
from ooxml_diff.file_comparison import BinaryComparison, ContentComparer
from ooxml_diff.relationships import RelationshipMap, load_relationship_map
from ooxml_diff.tree_merge import merge_trees
from ooxml_diff.utils import classify_path


def is_critical_part(path: str) -> bool:
    """
    :return: True if removing the part at the given path is likely to corrupt the document.
    """
    name = path.rstrip('/').rsplit('/', 1)[-1]
    return any(path.endswith(critical) or name == critical for critical in CRITICAL_PARTS)


@dataclass
class DeleteSummary:
    """
    Information shown before a node is deleted from one or both archives.
    """
    path: str
    is_dir: bool
    left: bool
    right: bool
    left_count: int
    right_count: int
    critical: bool


@dataclass
class PartPair:
    """
    Display-ready contents of a part on both sides. A side is None if the part does not exist there.
    """
    path: str
    kind: ContentKind
    left: Union[str, bytes, None]
    right: Union[str, bytes, None]
    left_relationships: RelationshipMap
    right_relationships: RelationshipMap


class ArchiveDiffer:
    """
    Holds the stores of two archives and computes the annotated diff tree between them. The tree
    has to be recomputed after every modification of either store.
    """

    def __init__(self, left: ArchiveStore, right: ArchiveStore,
                 binary_comparison: BinaryComparison = BinaryComparison.FULL):
        """
        :param left: Store of the first archive.
        :param right: Store of the second archive.
        :param binary_comparison: Equality strategy for binary parts.
        """
        self.left = left
        self.right = right
        self._comparer = ContentComparer(binary_comparison)

    @classmethod
    def from_paths(cls, left_archive: Union[str, pl.Path], right_archive: Union[str, pl.Path],
                   **kwargs) -> ArchiveDiffer:
        """
        Loads both archives from disk.

        :raises FileNotFoundError: If one of the paths does not exist.
        :raises LoadError: If one of the files is not a valid archive.
        """
        return cls(ArchiveStore.from_path(left_archive), ArchiveStore.from_path(right_archive),
                   **kwargs)

    def compute_diff(self) -> List[MergedTreeNode]:
        """
        Builds both trees, merges them and computes the status of every node.

        :return: Sorted root nodes of the annotated merged tree.
        """
        merged = merge_trees(self.left.list_tree(), self.right.list_tree())
        compute_diff_statuses(merged, self.left, self.right, self._comparer)
        logger.debug('Computed diff between {} and {}', self.left.name, self.right.name)
        return merged

    @staticmethod
    def stats(nodes: List[MergedTreeNode]) -> Dict[DiffStatus, int]:
        return diff_stats(nodes)

    def delete_summary(self, node: MergedTreeNode) -> DeleteSummary:
        """
        Collects what deleting the node would remove, for confirmation prompts.
        """
        left_count = right_count = 0
        if node.is_dir:
            if node.left_exists:
                left_count = self.left.count_entries_under(node.path)
            if node.right_exists:
                right_count = self.right.count_entries_under(node.path)
        return DeleteSummary(
            path=node.path,
            is_dir=node.is_dir,
            left=node.left_exists,
            right=node.right_exists,
            left_count=left_count,
            right_count=right_count,
            critical=is_critical_part(node.path),
        )

    def delete(self, node: MergedTreeNode) -> List[MergedTreeNode]:
        """
        Removes the node from every archive it exists in. Directories are removed with their whole
        subtree.

        :raises NotFoundError: If a file node no longer exists in a store it is flagged for.
        :return: The recomputed diff tree.
        """
        for side, exists, store in (('left', node.left_exists, self.left),
                                    ('right', node.right_exists, self.right)):
            if not exists:
                continue
            if node.is_dir:
                store.remove_subtree(node.path)
            else:
                store.remove_entry(node.path)
            logger.debug('Deleted {} from {} archive', node.path, side)
        return self.compute_diff()

    def load_part_pair(self, path: str) -> PartPair:
        """
        Reads a part from both archives for side-by-side display. XML content is formatted with
        sorted attributes, binary content is returned as is.

        :param path: Archive path of the part.
        :return: Contents and relationship maps of both sides.
        """
        kind = classify_path(path)

        def load(store: ArchiveStore):
            if not store.has_entry(path):
                return None, {}
            content = store.read_entry(path)
            if kind is ContentKind.BINARY:
                return content, {}
            return format_for_display(content), load_relationship_map(store, path)

        left, left_relationships = load(self.left)
        right, right_relationships = load(self.right)
        return PartPair(path, kind, left, right, left_relationships, right_relationships)
