"""
Test cases for the tree builder.
"""
import unittest
from unittest import TestCase

from ooxml_diff.diff_data import TreeNode, walk
from ooxml_diff.tree_builder import build_tree, sort_nodes


def names(nodes):
    return [node.name for node in nodes]


class TestBuildTree(TestCase):
    """
    Tests the conversion of entry listings into trees.
    """

    entries = [
        ('word/document.xml', False),
        ('[Content_Types].xml', False),
        ('word/media/image1.png', False),
        ('_rels/.rels', False),
        ('word/_rels/document.xml.rels', False),
        ('docProps/', True),
        ('docProps/app.xml', False),
    ]

    def test_implicit_directories(self):
        """
        Intermediate segments become directories without explicit entries.
        """
        tree = build_tree([('a/b/c.xml', False)])

        self.assertEqual(1, len(tree))
        a = tree[0]
        self.assertTrue(a.is_dir)
        self.assertEqual('a', a.path)
        b = a.children[0]
        self.assertTrue(b.is_dir)
        self.assertEqual('a/b', b.path)
        c = b.children[0]
        self.assertFalse(c.is_dir)
        self.assertIsNone(c.children)
        self.assertEqual('a/b/c.xml', c.path)

    def test_build_is_idempotent(self):
        self.assertEqual(build_tree(self.entries), build_tree(self.entries))

    def test_path_invariant(self):
        def check(nodes, parent):
            for node in nodes:
                expected = f'{parent}/{node.name}' if parent else node.name
                self.assertEqual(expected, node.path)
                if node.children:
                    check(node.children, node.path)

        check(build_tree(self.entries), None)

    def test_sort_invariant(self):
        """
        Directories come first, then files, both case-insensitive by name.
        """
        tree = build_tree([
            ('b.xml', False),
            ('Zeta/x.xml', False),
            ('A.xml', False),
            ('alpha/y.xml', False),
            ('c.XML', False),
        ])
        self.assertEqual(['alpha', 'Zeta', 'A.xml', 'b.xml', 'c.XML'], names(tree))

        for node in walk(build_tree(self.entries)):
            if not node.children:
                continue
            keys = [(not child.is_dir, child.name.casefold()) for child in node.children]
            self.assertEqual(sorted(keys), keys)

    def test_directories_are_deduplicated(self):
        """
        Entries sharing a directory reuse the same node, regardless of entry order.
        """
        tree = build_tree([
            ('word/document.xml', False),
            ('word/', True),
            ('word/styles.xml', False),
        ])
        self.assertEqual(['word'], names(tree))
        self.assertEqual(['document.xml', 'styles.xml'], names(tree[0].children))

    def test_empty_directory_marker(self):
        tree = build_tree([('empty/', True)])
        self.assertEqual([TreeNode('empty', 'empty', True, [])], tree)

    def test_trailing_slash_marks_directory(self):
        tree = build_tree([('folder/', False)])
        self.assertTrue(tree[0].is_dir)

    def test_empty_segments_are_dropped(self):
        tree = build_tree([('word//media/image1.png', False)])
        self.assertEqual(['word'], names(tree))
        self.assertEqual(['media'], names(tree[0].children))
        self.assertEqual('word/media/image1.png', tree[0].children[0].children[0].path)

    def test_file_promoted_by_later_prefix(self):
        tree = build_tree([('a', False), ('a/b.xml', False)])
        self.assertEqual(1, len(tree))
        self.assertTrue(tree[0].is_dir)
        self.assertEqual(['b.xml'], names(tree[0].children))

    def test_empty_listing(self):
        self.assertEqual([], build_tree([]))


class TestSortNodes(TestCase):
    """
    Tests the recursive sibling ordering.
    """

    def test_sort_recursive(self):
        nodes = [
            TreeNode('b.xml', 'b.xml', False),
            TreeNode('dir', 'dir', True, [
                TreeNode('z.xml', 'dir/z.xml', False),
                TreeNode('sub', 'dir/sub', True),
                TreeNode('A.xml', 'dir/A.xml', False),
            ]),
        ]
        sort_nodes(nodes)

        self.assertEqual(['dir', 'b.xml'], names(nodes))
        self.assertEqual(['sub', 'A.xml', 'z.xml'], names(nodes[0].children))


if __name__ == '__main__':
    unittest.main()
