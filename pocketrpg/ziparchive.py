"""Minimal reader for stored and deflated zip archives."""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO, Optional, Union

LOCAL_FILE_SIG = 0x04034B50
CENTRAL_DIRECTORY_SIG = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIG = 0x06054B50
ENCRYPTED_FLAG = 0x1
UTF8_NAME_FLAG = 0x800

METHOD_STORED = 0
METHOD_DEFLATED = 8

_EOCD = struct.Struct("<IHHHHII")
_CENTRAL = struct.Struct("<IHHHHHHIIIHHHHHII")
_LOCAL = struct.Struct("<IHHHHHIIIHH")
_EOCD_MARKER = b"PK\x05\x06"
_MAX_COMMENT = 0xFFFF


class ZipFormatError(Exception):
    """Raised when an archive is malformed or uses an unsupported feature."""


@dataclass(frozen=True)
class ZipEntry:
    """One file recorded in the central directory."""

    name: str
    offset: int
    compressed_size: int
    uncompressed_size: int


def find_end_of_central_directory(data: bytes) -> int:
    """Offset of the last end-of-central-directory record within ``data``."""
    start = max(0, len(data) - (_MAX_COMMENT + _EOCD.size))
    position = data.rfind(_EOCD_MARKER, start)
    if position < 0:
        raise ZipFormatError("cannot find end of central directory")
    return position


def _unpack(layout: struct.Struct, raw: bytes, what: str) -> tuple:
    if len(raw) < layout.size:
        raise ZipFormatError(f"truncated {what}")
    return layout.unpack(raw[: layout.size])


class ZipArchive:
    """A zip file opened for reading entries by name."""

    def __init__(self, path: Union[str, PathLike]) -> None:
        self._file: Optional[BinaryIO] = open(path, "rb")
        self.entries: list[ZipEntry] = []
        try:
            self._read_directory()
        except BaseException:
            self.close()
            raise

    def _read_directory(self) -> None:
        handle = self._file
        size = handle.seek(0, 2)
        tail_length = min(size, _MAX_COMMENT + _EOCD.size)
        handle.seek(size - tail_length)
        tail = handle.read(tail_length)
        start = find_end_of_central_directory(tail)

        sig, _disk, _start_disk, _here, count, _cd_size, cd_offset = _unpack(
            _EOCD, tail[start:], "end of central directory"
        )
        if sig != END_OF_CENTRAL_DIRECTORY_SIG:
            raise ZipFormatError(
                f"wrong zip end of central directory signature (0x{sig:x})"
            )
        if count <= 0:
            raise ZipFormatError("no entries in central directory")

        handle.seek(cd_offset)
        for _ in range(count):
            fields = _unpack(_CENTRAL, handle.read(_CENTRAL.size), "central directory")
            sig, general = fields[0], fields[3]
            if sig != CENTRAL_DIRECTORY_SIG:
                raise ZipFormatError(
                    f"wrong zip central directory signature (0x{sig:x})"
                )
            csize, usize = fields[8], fields[9]
            name_size, meta_size, comment_size = fields[10], fields[11], fields[12]
            offset = fields[16]
            raw_name = handle.read(name_size)
            encoding = "utf-8" if general & UTF8_NAME_FLAG else "cp437"
            name = raw_name.decode(encoding, errors="replace")
            handle.seek(meta_size + comment_size, 1)
            self.entries.append(ZipEntry(name, offset, csize, usize))

    def close(self) -> None:
        """Release the underlying file; safe to call more than once."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ZipArchive":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def names(self) -> list[str]:
        """Names of all entries in directory order."""
        return [entry.name for entry in self.entries]

    def _find(self, name: str) -> ZipEntry:
        wanted = name.lower()
        for entry in self.entries:
            if entry.name.lower() == wanted:
                return entry
        raise KeyError(f"did not find the {name} file in the zip file")

    def read(self, name: str) -> bytes:
        """Contents of the entry called ``name``, matched without regard to case."""
        if self._file is None:
            raise ValueError("archive is closed")
        entry = self._find(name)
        handle = self._file
        handle.seek(entry.offset)
        fields = _unpack(_LOCAL, handle.read(_LOCAL.size), "local file header")
        sig, _version, general, method = fields[0], fields[1], fields[2], fields[3]
        if sig != LOCAL_FILE_SIG:
            raise ZipFormatError(f"wrong zip local file signature (0x{sig:x})")
        if general & ENCRYPTED_FLAG:
            raise ZipFormatError("zipfile content is encrypted")
        name_length, extra_length = fields[9], fields[10]
        handle.seek(name_length + extra_length, 1)

        data = handle.read(entry.compressed_size)
        if len(data) < entry.compressed_size:
            raise ZipFormatError(f"truncated data for {entry.name}")

        if method == METHOD_STORED:
            return data
        if method == METHOD_DEFLATED:
            inflater = zlib.decompressobj(-15)
            try:
                result = inflater.decompress(data) + inflater.flush()
            except zlib.error as exc:
                raise ZipFormatError(f"zlib inflate error: {exc}") from exc
            if not inflater.eof:
                raise ZipFormatError("zlib inflate error: incomplete stream")
            return result
        raise ZipFormatError(f"unknown zip method: {method}")