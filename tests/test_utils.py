"""
Test cases for the utility functions.
"""
import unittest
from unittest import TestCase

from ooxml_diff.diff_data import ContentKind
from ooxml_diff.utils import classify_path, is_under, parent_path, path_parts


class TestUtilityFunctions(TestCase):
    """
    Tests the utility functions.
    """

    def test_path_parts(self):
        self.assertEqual(['word', 'media', 'image1.png'], path_parts('word//media/image1.png/'))
        self.assertEqual([], path_parts(''))

    def test_parent_path(self):
        self.assertEqual('word/media', parent_path('word/media/image1.png'))
        self.assertIsNone(parent_path('document.xml'))

    def test_is_under(self):
        self.assertTrue(is_under('a/b.xml', 'a'))
        self.assertTrue(is_under('a', 'a/'))
        self.assertFalse(is_under('ab.xml', 'a'))

    def test_classify_path(self):
        for path in ('word/document.xml', '_rels/.rels', 'word/vmlDrawing1.vml', 'README.TXT'):
            self.assertIs(ContentKind.TEXT, classify_path(path), path)
        for path in ('word/media/image1.png', 'image.JPEG', 'word/embeddings/oleObject1.bin',
                     'mimetype'):
            self.assertIs(ContentKind.BINARY, classify_path(path), path)


if __name__ == '__main__':
    unittest.main()
