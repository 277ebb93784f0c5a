"""
Gzip member header structures and parsing logic.

This module provides the data structures for the RFC 1952 member header and
the parsers for the fixed header and the flag-driven optional fields
(FEXTRA, FNAME, FCOMMENT, FHCRC).
"""

import zlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from .cursor import ByteCursor
from .types import (
    EXTRA_PREFIX_SIZE,
    FCOMMENT,
    FEXTRA,
    FHCRC,
    FIELD_TERMINATOR,
    FLAGS_RESERVED_MASK,
    FNAME,
    FTEXT,
    GZIP_SIGNATURE,
    HEADER_CRC_SIZE,
    BadMagicError,
    HeaderChecksumMismatchError,
    ReservedFlagSetError,
    ReservedSubfieldIdError,
    UnterminatedFieldError,
)

# =============================================================================
# Constants
# =============================================================================

# Fixed header offsets
HEADER_SIGNATURE_START = 0x00
HEADER_SIGNATURE_END = 0x03
HEADER_FLAGS_OFFSET = 0x03
HEADER_MTIME_START = 0x04
HEADER_MTIME_END = 0x08
HEADER_XFL_OFFSET = 0x08
HEADER_OS_OFFSET = 0x09

# XFL values for the deflate method
XFL_MAXIMUM_COMPRESSION = 2
XFL_FASTEST_COMPRESSION = 4

OS_UNKNOWN = 255

# Operating system identifiers from RFC 1952 section 2.3.1
OS_NAMES = {
    0: "FAT",
    1: "Amiga",
    2: "VMS",
    3: "Unix",
    4: "VM/CMS",
    5: "Atari TOS",
    6: "HPFS",
    7: "Macintosh",
    8: "Z-System",
    9: "CP/M",
    10: "TOPS-20",
    11: "NTFS",
    12: "QDOS",
    13: "Acorn RISCOS",
    OS_UNKNOWN: "unknown",
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class ExtraField:
    """FEXTRA subfield: two id bytes and the subfield content."""
    subfield_id_1: int  # SI1
    subfield_id_2: int  # SI2, never zero
    content: bytes

    def __str__(self) -> str:
        return (
            f"ExtraField(id={bytes((self.subfield_id_1, self.subfield_id_2))!r}, "
            f"length={len(self.content)})"
        )


@dataclass(frozen=True)
class GzipHeader:
    """
    Parsed gzip member header.

    Optional fields are ``None`` when their flag bit is clear. The header
    CRC16 is checked during parsing and not kept.
    """
    flags: int  # FLG byte, reserved bits always zero
    modification_time: int  # MTIME, signed 32-bit seconds since epoch
    extra_flags: int  # XFL
    os: int  # OS
    extra_field: Optional[ExtraField] = None
    filename: Optional[bytes] = None
    comment: Optional[bytes] = None

    @property
    def is_text(self) -> bool:
        return bool(self.flags & FTEXT)

    @property
    def has_header_crc(self) -> bool:
        return bool(self.flags & FHCRC)

    @property
    def modified_at(self) -> Optional[datetime]:
        """MTIME as an aware UTC datetime, or None when no time stamp is set."""
        if self.modification_time == 0:
            return None
        return _EPOCH + timedelta(seconds=self.modification_time)

    @property
    def os_name(self) -> str:
        return OS_NAMES.get(self.os, OS_NAMES[OS_UNKNOWN])

    @property
    def compression_level_hint(self) -> Optional[str]:
        if self.extra_flags == XFL_MAXIMUM_COMPRESSION:
            return "maximum"
        if self.extra_flags == XFL_FASTEST_COMPRESSION:
            return "fastest"
        return None

    def __str__(self) -> str:
        return (
            f"GzipHeader(flags=0x{self.flags:02x}, "
            f"mtime={self.modification_time}, "
            f"xfl={self.extra_flags}, "
            f"os={self.os_name}, "
            f"filename={self.filename!r}, "
            f"comment={self.comment!r}, "
            f"extra_field={self.extra_field})"
        )


# =============================================================================
# Parsing Functions
# =============================================================================

def _parse_fixed_header(cursor: ByteCursor) -> Tuple[int, int, int, int]:
    """
    Parse the 10-byte fixed header.

    Returns:
        Tuple of (flags, modification_time, extra_flags, os)

    Raises:
        BadMagicError: If the signature or compression method is wrong
        ReservedFlagSetError: If any reserved FLG bit is set
    """
    signature = cursor.read(HEADER_SIGNATURE_END - HEADER_SIGNATURE_START)
    if signature != GZIP_SIGNATURE:
        raise BadMagicError(
            f"Bad gzip signature: {signature.hex()}, expected {GZIP_SIGNATURE.hex()}"
        )

    flags = cursor.read_u8()
    if flags & FLAGS_RESERVED_MASK:
        raise ReservedFlagSetError(
            f"Reserved flag bits set: 0x{flags & FLAGS_RESERVED_MASK:02x}"
        )

    modification_time = cursor.read_i32le()
    extra_flags = cursor.read_u8()
    os = cursor.read_u8()
    return flags, modification_time, extra_flags, os


def _parse_extra_field(cursor: ByteCursor) -> ExtraField:
    """
    Parse the FEXTRA section: SI1, SI2, LEN (u16 LE), then LEN content bytes.

    Raises:
        ReservedSubfieldIdError: If SI2 is zero
        TooShortError: If the buffer cannot hold the declared content
    """
    subfield_id_1 = cursor.read_u8()
    subfield_id_2 = cursor.read_u8()
    if subfield_id_2 == 0:
        raise ReservedSubfieldIdError(
            f"Reserved subfield id 2 (0x00) at offset {cursor.position - 1}"
        )

    length = cursor.read_u16le()
    cursor.require(length + EXTRA_PREFIX_SIZE)
    content = cursor.read(length)

    return ExtraField(
        subfield_id_1=subfield_id_1,
        subfield_id_2=subfield_id_2,
        content=content,
    )


def _parse_terminated_field(cursor: ByteCursor, name: str) -> bytes:
    """
    Parse a zero-terminated field (FNAME or FCOMMENT).

    Returns:
        Field content without the terminator

    Raises:
        UnterminatedFieldError: If no terminator occurs in the rest of the buffer
        TooShortError: If the buffer cannot hold the field
    """
    length = cursor.find(FIELD_TERMINATOR)
    if length < 0:
        raise UnterminatedFieldError(
            f"{name} starting at offset {cursor.position} has no terminator"
        )

    cursor.require(length + 1)
    content = cursor.read(length)
    cursor.skip(1)
    return content


def _validate_header_crc(cursor: ByteCursor) -> None:
    """
    Check the FHCRC value against the low 16 bits of the CRC-32 of every
    header byte before it.

    Raises:
        HeaderChecksumMismatchError: If the values differ
        TooShortError: If the buffer cannot hold the CRC16
    """
    cursor.require(HEADER_CRC_SIZE)
    expected = zlib.crc32(cursor.consumed()) & 0xFFFF
    stored = cursor.read_u16le()
    if stored != expected:
        raise HeaderChecksumMismatchError(
            f"Header CRC16 mismatch: stored 0x{stored:04x}, computed 0x{expected:04x}"
        )


def read_header(cursor: ByteCursor) -> GzipHeader:
    """
    Parse the fixed header and every optional field present, leaving the
    cursor at the first payload byte.

    Optional fields are read in wire order: FEXTRA, FNAME, FCOMMENT, FHCRC.
    """
    flags, modification_time, extra_flags, os = _parse_fixed_header(cursor)

    extra_field = None
    if flags & FEXTRA:
        extra_field = _parse_extra_field(cursor)

    filename = None
    if flags & FNAME:
        filename = _parse_terminated_field(cursor, "FNAME")

    comment = None
    if flags & FCOMMENT:
        comment = _parse_terminated_field(cursor, "FCOMMENT")

    if flags & FHCRC:
        _validate_header_crc(cursor)

    return GzipHeader(
        flags=flags,
        modification_time=modification_time,
        extra_flags=extra_flags,
        os=os,
        extra_field=extra_field,
        filename=filename,
        comment=comment,
    )


def parse_header(data: bytes) -> Tuple[GzipHeader, int]:
    """
    Parse a gzip member header from raw bytes.

    The buffer must hold the whole container, since the minimum size checks
    include room for the trailer.

    Args:
        data: Raw gzip container bytes

    Returns:
        Tuple of (GzipHeader, offset of the first payload byte)

    Raises:
        GzipError: If the header is truncated or malformed
    """
    cursor = ByteCursor(bytes(data))
    header = read_header(cursor)
    return header, cursor.position
