"""
Test cases for content comparison.
"""
import io
import unittest
from unittest import TestCase, mock

from ooxml_diff.file_comparison import BinaryComparison, ContentComparer, FileHasher


class TestFileHasher(TestCase):
    """
    Tests hashing of bytes and streams.
    """

    def test_md5(self):
        hasher = FileHasher('md5')
        self.assertEqual('900150983cd24fb0d6963f7d28e17f72', hasher.compute_hash(b'abc'))
        self.assertEqual('d41d8cd98f00b204e9800998ecf8427e', hasher.compute_hash(io.BytesIO(b'')))

    def test_small_buffer(self):
        hasher = FileHasher('md5', hash_buffer_size=2)
        self.assertEqual('900150983cd24fb0d6963f7d28e17f72', hasher.compute_hash(b'abc'))

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            FileHasher('not-a-hash')


class TestContentComparer(TestCase):
    """
    Tests the equality strategies.
    """

    def test_full_detects_same_size_difference(self):
        comparer = ContentComparer(BinaryComparison.FULL)
        self.assertFalse(comparer.equal(b'\x00\x01', b'\x01\x00'))
        self.assertTrue(comparer.equal(b'\x00\x01', b'\x00\x01'))

    def test_full_compares_bytes_without_hashing(self):
        comparer = ContentComparer()
        with mock.patch.object(FileHasher, 'compute_hash') as compute_hash:
            self.assertTrue(comparer.equal(b'\x89PNG', b'\x89PNG'))
            self.assertFalse(comparer.equal(b'\x89PNG', b'\x89PNX'))
        compute_hash.assert_not_called()

    def test_size_only_treats_same_size_as_equal(self):
        comparer = ContentComparer(BinaryComparison.SIZE)
        self.assertTrue(comparer.equal(b'\x00\x01', b'\x01\x00'))
        self.assertFalse(comparer.equal(b'\x00', b'\x00\x00'))

    def test_text_uses_canonical_form(self):
        comparer = ContentComparer()
        self.assertTrue(comparer.equal('<a x="1" y="2"/>', '<a y="2"   x="1"/>'))
        self.assertFalse(comparer.equal('<a x="1"/>', '<a x="2"/>'))

    def test_text_never_equals_binary(self):
        comparer = ContentComparer()
        self.assertFalse(comparer.equal('<a/>', b'<a/>'))


if __name__ == '__main__':
    unittest.main()
