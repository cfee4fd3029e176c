"""
Helper to compare file contents.
"""

from __future__ import annotations

import hashlib as hl
import io
from enum import Enum
from typing import Union

from ooxml_diff.canonicalize import xml_equal


class BinaryComparison(Enum):
    """
    Strategy used to decide whether two binary parts are equal.
    """

    # Compare the full contents byte by byte.
    FULL = 'full'
    # Compare only the byte lengths. Cheap, but different images of the same size compare equal.
    SIZE = 'size'


class FileHasher:
    """
    Helper class to compute hash values of byte strings and io streams. Used to report digests of
    binary parts, equality checks compare the bytes directly.
    """

    def __init__(self, hash_algorithm: str, hash_buffer_size=128 * 1024):
        """
        :param hash_algorithm: Hashing algorithm, must be supported by `hashlib`
        :param hash_buffer_size: Buffer size used to read the input streams.
        """
        # Fail early on unknown algorithms.
        hl.new(hash_algorithm)
        self.hash_algorithm = hash_algorithm
        self.hash_buffer_size = hash_buffer_size

    def __repr__(self):
        return f'FileHasher({self.hash_algorithm})'

    def compute_hash(self, input_io) -> str:
        """
        Computes the hash sum for an input io object or byte string.
        :param input_io: input io object or bytes
        :return: string with the hex representation of the hash
        """
        if isinstance(input_io, (bytes, bytearray)):
            input_io = io.BytesIO(input_io)

        digest = hl.new(self.hash_algorithm)
        while True:
            data = input_io.read(self.hash_buffer_size)
            if not data:
                break
            digest.update(data)
        return digest.hexdigest()


class ContentComparer:
    """
    Decides whether the contents of two corresponding parts are equal. Text is compared in its
    canonical XML form, binary data according to the configured `BinaryComparison`.
    """

    def __init__(self, binary_comparison: BinaryComparison = BinaryComparison.FULL):
        self.binary_comparison = binary_comparison

    def __repr__(self):
        return f'ContentComparer({self.binary_comparison.value})'

    def binary_equal(self, left: bytes, right: bytes) -> bool:
        if len(left) != len(right):
            return False
        if self.binary_comparison is BinaryComparison.SIZE:
            return True
        return left == right

    def equal(self, left: Union[str, bytes], right: Union[str, bytes]) -> bool:
        """
        :param left: Left content as returned by `ArchiveStore.read_entry()`.
        :param right: Right content as returned by `ArchiveStore.read_entry()`.
        :return: True if the contents are considered equal. Text never equals binary data.
        """
        if isinstance(left, str) and isinstance(right, str):
            return xml_equal(left, right)
        if isinstance(left, bytes) and isinstance(right, bytes):
            return self.binary_equal(left, right)
        return False
