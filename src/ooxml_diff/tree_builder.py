"""
Conversion of flat archive entry listings into a nested node hierarchy.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ooxml_diff.diff_data import TreeNode
from ooxml_diff.utils import path_parts


def node_sort_key(node: TreeNode):
    """
    Directories before files, then case-insensitive by name. The exact name breaks ties so that the
    order is total.
    """
    return not node.is_dir, node.name.casefold(), node.name


def sort_nodes(nodes: List[TreeNode]) -> List[TreeNode]:
    """
    Sorts the sibling list and, recursively, the children of every node in place.

    :param nodes: Sibling list to sort.
    :return: The same list for convenience.
    """
    nodes.sort(key=node_sort_key)
    for node in nodes:
        if node.children:
            sort_nodes(node.children)
    return nodes


def build_tree(entries: Iterable[Tuple[str, bool]]) -> List[TreeNode]:
    """
    Builds the file tree of an archive from its entry listing.

    Every segment but the last one of an entry path is a directory, even if the archive contains no
    explicit entry for it. The last segment is a directory if the entry is marked as one or if a
    later entry uses it as a prefix. Nodes are shared between all entries that pass through the same
    path.

    :param entries: Pairs of (relative path, directory marker) in archive order.
    :return: Sorted list of root nodes.
    """
    roots: List[TreeNode] = []
    # (parent path, name) -> node. The empty string is the parent path of root nodes.
    index: Dict[Tuple[str, str], TreeNode] = {}

    for relpath, is_dir_marker in entries:
        parts = path_parts(relpath)
        marked_dir = is_dir_marker or relpath.endswith('/')

        parent_path = ''
        siblings = roots
        for position, part in enumerate(parts):
            is_last = position == len(parts) - 1
            as_dir = marked_dir or not is_last
            path = f'{parent_path}/{part}' if parent_path else part

            node = index.get((parent_path, part))
            if node is None:
                node = TreeNode(name=part, path=path, is_dir=as_dir)
                index[(parent_path, part)] = node
                siblings.append(node)
            elif as_dir and not node.is_dir:
                node.make_dir()

            if node.is_dir:
                siblings = node.children
            parent_path = path

    return sort_nodes(roots)
