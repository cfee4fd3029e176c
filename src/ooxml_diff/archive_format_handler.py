"""
Implementations of handlers (listing, reading and writing of entries) for archive containers.
"""
from __future__ import annotations

import io
import time
import zipfile
import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from loguru import logger

from ooxml_diff.constants import ODF_MIMETYPE_ENTRY
from ooxml_diff.errors import LoadError

# General purpose flag bit marking an encrypted zip entry.
_ENCRYPTED_FLAG = 0x1


def _now() -> Tuple[int, int, int, int, int, int]:
    return time.localtime(time.time())[:6]


@dataclass
class ArchiveEntry:
    """
    Data class representing a single entry of an archive. Directory markers have a name ending in a
    slash and no data.
    """
    name: str
    is_dir: bool
    data: bytes = b''
    compress_type: int = zipfile.ZIP_DEFLATED
    date_time: Tuple[int, int, int, int, int, int] = field(default_factory=_now)

    @property
    def size(self) -> int:
        return len(self.data)


class ArchiveFormatHandler(ABC):
    """
    Base class for all archive handlers.
    """

    @abstractmethod
    def check_bytes(self, data: bytes) -> bool:
        """
        Checks if the given bytes can be processed by this handler.

        :param data: Raw archive bytes.
        :return: True, if the bytes are a valid archive for this handler.
        """
        raise NotImplementedError()

    @abstractmethod
    def read_entries(self, data: bytes) -> List[ArchiveEntry]:
        """
        Lists and reads all entries of the archive.

        :param data: Raw archive bytes.
        :raises LoadError: If the input is not supported by this handler.
        :return: Entries of the archive in archive order.
        """
        raise NotImplementedError()

    @abstractmethod
    def write_entries(self, entries: Iterable[ArchiveEntry]) -> bytes:
        """
        Serializes the entries into a new archive.

        :param entries: Entries in the order they should appear in the archive.
        :return: Raw archive bytes.
        """
        raise NotImplementedError()


class ZipArchiveHandler(ArchiveFormatHandler):
    """
    Handler for zip-based packages (OOXML, ODF).
    """

    def check_bytes(self, data: bytes) -> bool:
        return zipfile.is_zipfile(io.BytesIO(data))

    def read_entries(self, data: bytes) -> List[ArchiveEntry]:
        if not self.check_bytes(data):
            raise LoadError('Not a zip file.')

        entries = []
        try:
            with zipfile.ZipFile(io.BytesIO(data), 'r') as archive:
                for info in archive.infolist():
                    if info.flag_bits & _ENCRYPTED_FLAG:
                        raise LoadError(f'Encrypted entries are not supported: {info.filename}')
                    if info.is_dir():
                        entries.append(ArchiveEntry(info.filename, True, b'', info.compress_type,
                                                    info.date_time))
                    else:
                        entries.append(ArchiveEntry(info.filename, False, archive.read(info),
                                                    info.compress_type, info.date_time))
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, EOFError,
                RuntimeError) as error:
            raise LoadError(f'Corrupt zip file: {error}') from error

        logger.debug('Read {} zip entries', len(entries))
        return entries

    def write_entries(self, entries: Iterable[ArchiveEntry]) -> bytes:
        entries = list(entries)
        # The mimetype entry of ODF packages has to come first and must not be compressed.
        entries.sort(key=lambda entry: entry.name != ODF_MIMETYPE_ENTRY)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w') as archive:
            for entry in entries:
                info = zipfile.ZipInfo(entry.name, date_time=entry.date_time)
                if entry.is_dir:
                    info.compress_type = zipfile.ZIP_STORED
                    # MS-DOS directory attribute, as set by ZipFile.mkdir.
                    info.external_attr = 0o40775 << 16 | 0x10
                elif entry.name == ODF_MIMETYPE_ENTRY:
                    info.compress_type = zipfile.ZIP_STORED
                else:
                    info.compress_type = entry.compress_type
                archive.writestr(info, entry.data)
        return buffer.getvalue()
