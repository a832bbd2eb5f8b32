# @mindmaze_header@
"""
Helpers to find out what files are
"""

import os
import stat

from os.path import basename, splitext
from typing import BinaryIO, List

from .errors import ScanError


SNIFF_LEN = 512
GENERIC_BINARY = 'application/octet-stream'
PLAIN_TEXT = 'text/plain; charset=utf-8'

# (signature, content type) of formats recognized by their first bytes.
# Subset of the table of https://mimesniff.spec.whatwg.org/ that matters for
# the content of an unpacked software bundle.
_MAGIC_SIGNATURES = [
    (b'%PDF-', 'application/pdf'),
    (b'%!PS-Adobe-', 'application/postscript'),
    (b'\xfe\xff', 'text/plain; charset=utf-16be'),
    (b'\xff\xfe', 'text/plain; charset=utf-16le'),
    (b'\xef\xbb\xbf', PLAIN_TEXT),
    (b'GIF87a', 'image/gif'),
    (b'GIF89a', 'image/gif'),
    (b'\x89PNG\r\n\x1a\n', 'image/png'),
    (b'\xff\xd8\xff', 'image/jpeg'),
    (b'BM', 'image/bmp'),
    (b'\x00\x00\x01\x00', 'image/x-icon'),
    (b'\x00\x00\x02\x00', 'image/x-icon'),
    (b'OggS\x00', 'application/ogg'),
    (b'ID3', 'audio/mpeg'),
    (b'\x1f\x8b\x08', 'application/x-gzip'),
    (b'PK\x03\x04', 'application/zip'),
    (b'Rar!\x1a\x07\x00', 'application/x-rar-compressed'),
    (b'Rar!\x1a\x07\x01\x00', 'application/x-rar-compressed'),
    (b'\x00asm', 'application/wasm'),
    (b'wOFF', 'font/woff'),
    (b'wOF2', 'font/woff2'),
]

# Markup detected after leading whitespace, compared case insensitively
_MARKUP_SIGNATURES = [
    (b'<?xml', 'text/xml; charset=utf-8'),
    (b'<!doctype html', 'text/html; charset=utf-8'),
    (b'<html', 'text/html; charset=utf-8'),
    (b'<head', 'text/html; charset=utf-8'),
    (b'<script', 'text/html; charset=utf-8'),
    (b'<!--', 'text/html; charset=utf-8'),
]

# bytes that never appear in text content
_BINARY_BYTES = frozenset(list(range(0x00, 0x09)) + [0x0b]
                          + list(range(0x0e, 0x1b))
                          + list(range(0x1c, 0x20)))


def sniff_content_type(data: bytes) -> str:
    """
    Determine the content type of data by looking at its first bytes.

    This follows the algorithm of the mime sniffing standard: known magic
    numbers first, then markup, then a text/binary decision. Content which
    is not recognized and contains control characters is reported as
    GENERIC_BINARY, which is the case of ELF files.
    """
    data = data[:SNIFF_LEN]

    for magic, content_type in _MAGIC_SIGNATURES:
        if data.startswith(magic):
            return content_type

    lowered = data.lstrip(b'\t\n\x0c\r ').lower()
    for magic, content_type in _MARKUP_SIGNATURES:
        if lowered.startswith(magic):
            return content_type

    if any(byte in _BINARY_BYTES for byte in data):
        return GENERIC_BINARY

    return PLAIN_TEXT


def sniff_file(fileobj: BinaryIO) -> str:
    """
    Sniff content type of an opened file. The position in the file is
    restored once the sniff buffer has been read.
    """
    pos = fileobj.tell()
    buf = fileobj.read(SNIFF_LEN)
    fileobj.seek(pos)
    return sniff_content_type(buf)


def has_shlib_name(filename: str) -> bool:
    """
    returns whether the name of a file is one of a native executable or of
    a shared object (no extension or contains .so)
    """
    base = basename(filename)
    return splitext(base)[1] == '' or '.so' in base


def is_scan_candidate(filename: str) -> bool:
    """
    Test whether a file is a native binary whose dependencies must be
    scanned.

    Symbolic links are never candidates: their target is scanned if it
    belongs to the scanned tree.

    Raises:
        ScanError: the file could not be inspected
    """
    try:
        info = os.lstat(filename)
        mode = info.st_mode

        if stat.S_ISDIR(mode):
            return False

        # skip zero-bit file
        if info.st_size == 0:
            return False

        # skip non-executable file
        if not mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
            return False

        if stat.S_ISLNK(mode):
            return False

        with open(filename, 'rb') as fileobj:
            content_type = sniff_file(fileobj)
    except OSError as err:
        raise ScanError(f'failed to inspect {filename}: {err}') from err

    if content_type != GENERIC_BINARY:
        return False

    return has_shlib_name(filename)


def _raise_walk_error(err: OSError):
    raise ScanError(f'failed to list {err.filename}: {err.strerror}') from err


def find_binaries(topdir: str) -> List[str]:
    """
    List recursively the native binaries of a folder. This does not follow
    symbolic links.

    Args:
        topdir: folder path whose content will be scanned

    Return:
        sorted list of paths (prefixed by topdir) of scan candidates

    Raises:
        ScanError: topdir or one of its elements could not be read
    """
    if not os.path.isdir(topdir):
        raise ScanError(f'{topdir} is not a readable directory')

    binaries = []
    for root, _, files in os.walk(topdir, onerror=_raise_walk_error):
        for name in files:
            path = os.path.join(root, name)
            if is_scan_candidate(path):
                binaries.append(path)

    return sorted(binaries)
