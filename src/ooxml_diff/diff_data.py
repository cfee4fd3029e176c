"""
Data classes representing archive trees and their diff.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional


class DiffStatus(Enum):
    """
    Enumeration that describes the possible difference states of a single path in the merged tree.
    """

    BOTH_SAME = 'both-same'
    BOTH_DIFF = 'both-diff'
    LEFT_ONLY = 'left-only'
    RIGHT_ONLY = 'right-only'


class ContentKind(Enum):
    """
    How the content of an archive entry is read and compared.
    """

    TEXT = 'text'
    BINARY = 'binary'


@dataclass
class TreeNode:
    """
    Node of the hierarchy derived from the flat entry list of one archive.
    """
    name: str
    path: str
    is_dir: bool
    children: Optional[List[TreeNode]] = None

    def __post_init__(self):
        if self.is_dir and self.children is None:
            self.children = []

    def make_dir(self):
        """
        Turns a file node into a directory node, e.g. if a later entry uses its path as a prefix.
        """
        self.is_dir = True
        if self.children is None:
            self.children = []

    def visit(self, visitor: Callable[[TreeNode], None]):
        """
        Calls the visitor for this node and all descendants in pre-order.
        """
        visitor(self)
        for child in self.children or ():
            child.visit(visitor)


@dataclass
class MergedTreeNode(TreeNode):
    """
    Node representing the union of a path's presence in two archives. `status` of directories is
    always derived from their subtree by the diff status engine.
    """
    children: Optional[List[MergedTreeNode]] = None
    left_exists: bool = False
    right_exists: bool = False
    status: DiffStatus = DiffStatus.BOTH_SAME
    contents_match: Optional[bool] = None
    # The path is a directory in one archive and a file in the other.
    type_conflict: bool = False

    @property
    def on_both_sides(self) -> bool:
        return self.left_exists and self.right_exists


def walk(nodes: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """
    Iterates over all nodes of a forest in pre-order.
    """
    for node in nodes:
        yield node
        if node.children:
            yield from walk(node.children)


def find_node(nodes: Iterable[TreeNode], path: str) -> Optional[TreeNode]:
    """
    :return: The node with the given path or None.
    """
    for node in walk(nodes):
        if node.path == path:
            return node
    return None


def diff_stats(nodes: Iterable[MergedTreeNode]) -> Dict[DiffStatus, int]:
    """
    Computes the number of file nodes per `DiffStatus`. Directories are not counted.

    :return: Dict mapping `DiffStatus` to the corresponding file counts.
    """
    counts = {status: 0 for status in DiffStatus}
    for node in walk(nodes):
        if not node.is_dir:
            counts[node.status] += 1
    return counts
