"""
In-memory model of one loaded archive.
"""

from __future__ import annotations

import pathlib as pl
from typing import Dict, List, Optional, Union

from loguru import logger

from ooxml_diff.archive_format_handler import ArchiveEntry, ArchiveFormatHandler, \
    ZipArchiveHandler
from ooxml_diff.diff_data import ContentKind, TreeNode
from ooxml_diff.errors import LoadError, NotFoundError
from ooxml_diff.tree_builder import build_tree
from ooxml_diff.utils import classify_path, is_under, path_parts


def _normalize(path: str) -> str:
    return '/'.join(path_parts(path))


def _entry_key(entry: ArchiveEntry) -> str:
    """
    Lookup key of an entry: its name without empty segments, directory markers keep a trailing
    slash. The raw name stays on the entry and is used when serializing.
    """
    key = _normalize(entry.name)
    return key + '/' if entry.is_dir else key


class ArchiveStore:
    """
    Owns the entry set of one loaded archive. All reads, writes and removals go through the store;
    the file tree is rebuilt from the current entries on every call to `list_tree()`.

    The store is not safe for concurrent mutation. Callers finish one operation before issuing the
    next one against the same store.
    """

    def __init__(self, handler: Optional[ArchiveFormatHandler] = None):
        """
        :param handler: Codec used to read and write the archive container. Defaults to zip.
        """
        self._handler = handler if handler is not None else ZipArchiveHandler()
        self._entries: Dict[str, ArchiveEntry] = {}
        self.name: Optional[str] = None
        self.source_path: Optional[pl.Path] = None

    def __repr__(self):
        return f'ArchiveStore({self.name!r}, entries={len(self._entries)})'

    @classmethod
    def from_bytes(cls, data: bytes, name: Optional[str] = None) -> ArchiveStore:
        store = cls()
        store.load(data, name)
        return store

    @classmethod
    def from_path(cls, path: Union[str, pl.Path]) -> ArchiveStore:
        """
        Loads the archive located at the given path.

        :raises FileNotFoundError: If the path does not exist.
        :raises LoadError: If the file is not a valid archive.
        """
        path = pl.Path(path)
        store = cls()
        store.load(path.read_bytes(), path.name)
        store.source_path = path
        return store

    def load(self, data: bytes, name: Optional[str] = None):
        """
        Replaces the current state with the entries of the given archive. On failure the previous
        state is kept.

        :param data: Raw archive bytes.
        :param name: File name the archive was loaded from, used as default output name.
        :raises LoadError: If the bytes are not a valid archive container.
        """
        entries = self._handler.read_entries(data)

        loaded = {}
        for entry in entries:
            key = _entry_key(entry)
            if key in loaded:
                logger.warning('Archive {} contains duplicate entry {}, keeping the last one',
                               name, key)
            loaded[key] = entry

        self._entries = loaded
        self.name = name
        self.source_path = None
        logger.debug('Loaded archive {} with {} entries', name, len(loaded))

    def entry_names(self) -> List[str]:
        """
        :return: Normalized names of all entries in archive order, directory markers included.
        """
        return list(self._entries)

    def has_entry(self, path: str) -> bool:
        """
        :return: True if a file entry exists at the given path.
        """
        entry = self._entries.get(_normalize(path))
        return entry is not None and not entry.is_dir

    def list_tree(self) -> List[TreeNode]:
        """
        :return: Sorted file tree of the current entries.
        """
        return build_tree((key, entry.is_dir) for key, entry in self._entries.items())

    def read_entry(self, path: str) -> Union[str, bytes]:
        """
        Reads the content of a file entry.

        :param path: Archive path of the entry.
        :raises NotFoundError: If there is no file entry at the path.
        :return: Decoded text for text parts, raw bytes for everything else.
        """
        path = _normalize(path)
        entry = self._entries.get(path)
        if entry is None or entry.is_dir:
            raise NotFoundError(path)

        if classify_path(path) is ContentKind.TEXT:
            return entry.data.decode('utf-8', errors='replace')
        return entry.data

    def write_entry(self, path: str, text: str):
        """
        Replaces the content of a text entry or creates it if it does not exist. The text is not
        validated.

        :param path: Archive path of the entry.
        :param text: New content.
        """
        path = _normalize(path)
        data = text.encode('utf-8')
        entry = self._entries.get(path)
        if entry is None:
            logger.debug('Creating entry {} in {}', path, self.name)
            self._entries[path] = ArchiveEntry(path, False, data)
        else:
            entry.data = data

    def remove_entry(self, path: str):
        """
        Removes exactly one entry.

        :param path: Archive path of the entry. An empty directory can be addressed with or without
            trailing slash.
        :raises NotFoundError: If there is no entry at the path.
        """
        path = _normalize(path)
        for candidate in (path, path + '/'):
            if candidate in self._entries:
                del self._entries[candidate]
                logger.debug('Removed entry {} from {}', candidate, self.name)
                return
        raise NotFoundError(path)

    def remove_subtree(self, prefix: str) -> int:
        """
        Removes the entry at `prefix` and every entry below it. `prefix` matching nothing is not an
        error.

        :param prefix: Archive path of a directory or file.
        :return: Number of removed entries.
        """
        prefix = _normalize(prefix)
        matching = [name for name in list(self._entries) if is_under(name, prefix)]
        for name in matching:
            del self._entries[name]
        logger.debug('Removed {} entries under {} from {}', len(matching), prefix, self.name)
        return len(matching)

    def count_entries_under(self, prefix: str) -> int:
        """
        :return: Number of file entries below the given directory. Directory markers are excluded.
        """
        prefix = _normalize(prefix) + '/'
        return sum(1 for name, entry in self._entries.items()
                   if name.startswith(prefix) and not entry.is_dir)

    def serialize(self) -> bytes:
        """
        :return: Archive bytes reflecting all writes and removals since the last load.
        """
        return self._handler.write_entries(self._entries.values())

    def save(self, path: Union[str, pl.Path, None] = None) -> pl.Path:
        """
        Writes the serialized archive to disk.

        :param path: Output path. Defaults to the path the archive was loaded from.
        :return: Path the archive was written to.
        """
        if path is None:
            if self.source_path is None and self.name is None:
                raise ValueError('No output path given and the archive has no name.')
            path = self.source_path if self.source_path is not None else pl.Path(self.name)
        path = pl.Path(path)
        path.write_bytes(self.serialize())
        logger.debug('Saved {} to {}', self.name, path)
        return path
