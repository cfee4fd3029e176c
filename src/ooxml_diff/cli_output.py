"""
Helper to display archive trees and diffs on the command line in various formats.
"""

import math
import sys
from typing import AbstractSet, Iterator, List, Optional, Tuple

from ooxml_diff.archive_diff import PartPair
from ooxml_diff.diff_data import DiffStatus, MergedTreeNode, TreeNode, diff_stats, walk
from ooxml_diff.file_comparison import FileHasher


def visible_rows(nodes: List[TreeNode], open_paths: Optional[AbstractSet[str]] = None,
                 selected_path: Optional[str] = None) -> Iterator[Tuple[int, TreeNode, bool]]:
    """
    Flattens a sorted tree into display rows. The presentation state is passed in explicitly.

    :param nodes: Root nodes.
    :param open_paths: Paths of expanded directories. None expands every directory.
    :param selected_path: Path of the selected node, if any.
    :return: Tuples of (depth, node, selected) in display order.
    """
    def rows(level: List[TreeNode], depth: int):
        for node in level:
            yield depth, node, node.path == selected_path
            if node.is_dir and (open_paths is None or node.path in open_paths):
                yield from rows(node.children, depth + 1)

    return rows(nodes, 0)


class DiffPrinter:
    """
    Utility to print archive trees and diffs in various formats
    """

    def __init__(self, suppress_common_lines=False, quiet=False, tree=False, output=sys.stdout,
                 hash_algorithm='md5'):
        """
        :param suppress_common_lines: True to only print lines that differ.
        :param quiet: True to use a short one line summary of the number of differences
        :param tree: True to print a tree-like diff output.
        :param output: Output stream to write to.
        :param hash_algorithm: Hash algorithm used to report digests of binary parts.
        """
        self.suppress_common_lines = suppress_common_lines
        self.quiet = quiet
        self.tree = tree
        self.output = output
        self._hasher = FileHasher(hash_algorithm)

        self._status_to_name = {
            DiffStatus.BOTH_SAME: 'Equal',
            DiffStatus.BOTH_DIFF: 'Different',
            DiffStatus.LEFT_ONLY: 'Only left',
            DiffStatus.RIGHT_ONLY: 'Only right',
        }
        self._divider = '*' * 80

    def line(self, *args):
        """
        Prints a line to the configured output stream.
        :param args: line contents
        """
        print(*args, file=self.output)

    def print_diff(self, nodes: List[MergedTreeNode]):
        """
        Prints the given merged tree in the configured output format.
        :param nodes: Annotated root nodes of the merged tree.
        """
        counts = diff_stats(nodes)

        if self.quiet:
            if sum(counts.values()) - counts[DiffStatus.BOTH_SAME] > 0:
                self.line(f'Different:'
                          f' e={counts[DiffStatus.BOTH_SAME]}'
                          f' d={counts[DiffStatus.BOTH_DIFF]}'
                          f' ol={counts[DiffStatus.LEFT_ONLY]}'
                          f' or={counts[DiffStatus.RIGHT_ONLY]}'
                          )
            return

        self.line(self._divider)

        if self.tree:
            self.print_diff_tree(nodes)
        else:
            self.print_line_diff(nodes)

        self.line(self._divider)

        max_count = max(1, int(math.ceil(math.log10(max(counts.values()) + 1))))
        pattern = f'{{status_name:11s}} {{status_count:{max_count:d}d}}'
        for status in DiffStatus:
            self.line(pattern.format(status_name=self._status_to_name[status] + ":",
                                     status_count=counts[status]))

        self.line(self._divider)

    def print_line_diff(self, nodes: List[MergedTreeNode]):
        """
        Prints one line per file.
        :param nodes: Annotated root nodes of the merged tree.
        """
        status_to_symbol = {
            DiffStatus.BOTH_SAME: ' ',
            DiffStatus.BOTH_DIFF: '|',
            DiffStatus.LEFT_ONLY: '<',
            DiffStatus.RIGHT_ONLY: '>',
        }
        files = [node for node in walk(nodes) if not node.is_dir]
        if not files:
            return
        longest_path = max(len(node.path) for node in files)
        record_template = f'{{rel_path:{longest_path}s}} {{status_sym:s}} {{status_name:s}}'
        for node in files:
            if not (self.suppress_common_lines and node.status == DiffStatus.BOTH_SAME):
                self.line(record_template.format(
                    rel_path=node.path,
                    status_sym=status_to_symbol[node.status],
                    status_name=self._status_to_name[node.status]))

    def print_diff_tree(self, nodes: List[MergedTreeNode]):
        """
        Prints a tree-style diff.
        :param nodes: Annotated root nodes of the merged tree.
        """
        status_to_symbol = {
            DiffStatus.BOTH_SAME: '=',
            DiffStatus.BOTH_DIFF: '#',
            DiffStatus.LEFT_ONLY: '<',
            DiffStatus.RIGHT_ONLY: '>',
        }
        open_paths = None
        if self.suppress_common_lines:
            # Equal directories are hidden together with their subtree.
            open_paths = {node.path for node in walk(nodes)
                          if node.is_dir and node.status != DiffStatus.BOTH_SAME}

        for depth, node, _ in visible_rows(nodes, open_paths):
            if self.suppress_common_lines and node.status == DiffStatus.BOTH_SAME:
                continue
            suffix = '/' if node.is_dir else ''
            self.line('|   ' * depth + f'{status_to_symbol[node.status]:s} {node.name:s}{suffix}')

    def print_tree(self, nodes: List[TreeNode]):
        """
        Prints the plain tree of a single archive.
        :param nodes: Root nodes.
        """
        for depth, node, _ in visible_rows(nodes):
            suffix = '/' if node.is_dir else ''
            self.line('|   ' * depth + node.name + suffix)

    def print_part(self, title: str, content):
        """
        Prints formatted text content, or a short description of binary content.
        """
        self.line(self._divider)
        self.line(title)
        self.line(self._divider)
        if content is None:
            self.line('(missing)')
        elif isinstance(content, bytes):
            self.line(f'(binary, {len(content)} bytes, '
                      f'{self._hasher.hash_algorithm} {self._hasher.compute_hash(content)})')
        else:
            self.line(content)

    def print_part_pair(self, pair: PartPair):
        self.print_part(f'Left: {pair.path}', pair.left)
        self.print_part(f'Right: {pair.path}', pair.right)

    def print_relationships(self, path: str, relationships):
        self.line(f'Relationships of {path}:')
        if not relationships:
            self.line('  (none)')
        for rel_id, target in sorted(relationships.items()):
            self.line(f'  {rel_id} -> {target}')


def print_diff(nodes: List[MergedTreeNode], *, suppress_common_lines=False, quiet=False,
               tree=False) -> None:
    """
    Prints the merged tree in a human-readable format to the standard output.

    :param nodes: Annotated root nodes of the merged tree.
    """

    printer = DiffPrinter(suppress_common_lines=suppress_common_lines, quiet=quiet, tree=tree)
    printer.print_diff(nodes)
