"""
Helpers to build test archives in memory.
"""
import io
import zipfile


def make_archive(files) -> bytes:
    """
    Builds a zip archive.

    :param files: Mapping or list of pairs from entry name to content. Text is encoded as UTF-8,
        None creates a directory marker (the name should end with a slash).
    :return: Raw archive bytes.
    """
    items = files.items() if isinstance(files, dict) else files
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for name, content in items:
            if content is None:
                archive.writestr(zipfile.ZipInfo(name), b'')
            elif isinstance(content, str):
                archive.writestr(name, content.encode('utf-8'))
            else:
                archive.writestr(name, content)
    return buffer.getvalue()


def read_archive(data: bytes):
    """
    :return: Mapping from entry name to raw content.
    """
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {info.filename: archive.read(info) for info in archive.infolist()}
