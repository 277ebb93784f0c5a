"""
Synthetic gzip container builders shared by the test modules.
"""

import struct
import zlib
from typing import Optional, Tuple

from gzcontainer.types import (
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FNAME,
    GZIP_SIGNATURE,
)

# Raw deflate encoding of an empty input (one final fixed-Huffman block)
EMPTY_DEFLATE = b"\x03\x00"


def deflate_raw(payload: bytes, level: int = 6) -> bytes:
    """Compress ``payload`` into a raw deflate stream (no framing)."""
    compressor = zlib.compressobj(level, zlib.DEFLATED, -zlib.MAX_WBITS)
    return compressor.compress(payload) + compressor.flush()


def build_header(
    flags: Optional[int] = None,
    modification_time: int = 0,
    extra_flags: int = 0,
    os: int = 3,
    extra_field: Optional[Tuple[int, int, bytes]] = None,
    extra_length: Optional[int] = None,
    filename: Optional[bytes] = None,
    comment: Optional[bytes] = None,
    header_crc: bool = False,
    header_crc_value: Optional[int] = None,
    signature: bytes = GZIP_SIGNATURE,
) -> bytes:
    """Build a gzip member header.

    When ``flags`` is None it is derived from which optional fields are
    given. ``extra_length`` overrides the declared FEXTRA length and
    ``header_crc_value`` overrides the computed CRC16.
    """
    if flags is None:
        flags = 0
        if extra_field is not None:
            flags |= FEXTRA
        if filename is not None:
            flags |= FNAME
        if comment is not None:
            flags |= FCOMMENT
        if header_crc:
            flags |= FHCRC

    header = b''
    header += signature
    header += bytes([flags])
    header += struct.pack('<i', modification_time)
    header += bytes([extra_flags, os])

    if extra_field is not None:
        si1, si2, content = extra_field
        length = len(content) if extra_length is None else extra_length
        header += bytes([si1, si2]) + struct.pack('<H', length) + content
    if filename is not None:
        header += filename + b'\x00'
    if comment is not None:
        header += comment + b'\x00'
    if header_crc:
        if header_crc_value is None:
            header_crc_value = zlib.crc32(header) & 0xFFFF
        header += struct.pack('<H', header_crc_value)
    return header


def build_trailer(
    payload: bytes,
    crc32: Optional[int] = None,
    isize: Optional[int] = None,
) -> bytes:
    """Build the 8-byte trailer for ``payload``, optionally overriding fields."""
    if crc32 is None:
        crc32 = zlib.crc32(payload) & 0xFFFFFFFF
    if isize is None:
        isize = len(payload) % (1 << 32)
    return struct.pack('<II', crc32, isize)


def build_container(
    payload: bytes = b'',
    header: Optional[bytes] = None,
    compressed: Optional[bytes] = None,
    crc32: Optional[int] = None,
    isize: Optional[int] = None,
) -> bytes:
    """Build a complete single-member gzip container."""
    if header is None:
        header = build_header()
    if compressed is None:
        compressed = deflate_raw(payload)
    return header + compressed + build_trailer(payload, crc32=crc32, isize=isize)
