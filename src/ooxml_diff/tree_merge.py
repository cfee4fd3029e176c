"""
Merging of two archive trees into one tree of dual-existence nodes.
"""

from __future__ import annotations

from typing import Dict, List

from loguru import logger

from ooxml_diff.diff_data import MergedTreeNode, TreeNode
from ooxml_diff.tree_builder import sort_nodes
from ooxml_diff.utils import parent_path


def _index_tree(nodes: List[TreeNode], index: Dict[str, MergedTreeNode], is_left: bool):
    for node in nodes:
        merged = index.get(node.path)
        if merged is None:
            merged = MergedTreeNode(name=node.name, path=node.path, is_dir=node.is_dir)
            index[node.path] = merged
        elif merged.is_dir != node.is_dir:
            logger.warning('{} is a directory in one archive and a file in the other', node.path)
            merged.type_conflict = True
            merged.make_dir()

        if is_left:
            merged.left_exists = True
        else:
            merged.right_exists = True

        if node.children:
            _index_tree(node.children, index, is_left)


def _link(index: Dict[str, MergedTreeNode]) -> List[MergedTreeNode]:
    roots = []
    for node in index.values():
        parent = index.get(parent_path(node.path) or '')
        if parent is not None and parent.is_dir:
            parent.children.append(node)
        else:
            # Also covers nodes whose parent was never indexed.
            roots.append(node)
    return roots


def merge_trees(left: List[TreeNode], right: List[TreeNode]) -> List[MergedTreeNode]:
    """
    Combines the trees of two archives into a single tree. Every path present in at least one of
    the inputs appears exactly once, with `left_exists` and `right_exists` set according to where
    it was found. The statuses are not computed here, see `compute_diff_statuses()`.

    The merge first indexes all nodes of both trees by path and then links every node to the node
    of its parent path, which handles trees of divergent shape without zipping them recursively.

    :param left: Root nodes of the left archive.
    :param right: Root nodes of the right archive.
    :return: Sorted root nodes of the merged tree.
    """
    index: Dict[str, MergedTreeNode] = {}
    _index_tree(left, index, is_left=True)
    _index_tree(right, index, is_left=False)
    return sort_nodes(_link(index))
