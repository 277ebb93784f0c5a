"""
Shared types, errors, and wire constants for gzip container parsing.

This module is the canonical source for constants and errors used across
the parser modules. It has no intra-package dependencies, so any module
can import from it without risk of circular imports.
"""

from enum import Enum


# =============================================================================
# Wire constants (RFC 1952)
# =============================================================================

# ID1, ID2 and CM (8 = deflate)
GZIP_SIGNATURE = b"\x1f\x8b\x08"

FIXED_HEADER_SIZE = 10  # ID1 ID2 CM FLG MTIME(4) XFL OS
TRAILER_SIZE = 8        # CRC32(4) ISIZE(4)
# Fixed header + empty deflate block + trailer
MIN_CONTAINER_SIZE = 18

# FLG bits
FTEXT = 0x01
FHCRC = 0x02
FEXTRA = 0x04
FNAME = 0x08
FCOMMENT = 0x10
FLAGS_RESERVED_MASK = 0xE0

FIELD_TERMINATOR = 0x00
HEADER_CRC_SIZE = 2
EXTRA_PREFIX_SIZE = 4  # SI1 SI2 LEN(2)

ISIZE_MODULUS = 1 << 32


# =============================================================================
# Failure reasons
# =============================================================================

class FailureReason(str, Enum):
    """Reason attached to every rejected container"""
    TOO_SHORT = "TooShort"
    BAD_MAGIC = "BadMagic"
    RESERVED_FLAG_SET = "ReservedFlagSet"
    RESERVED_SUBFIELD_ID = "ReservedSubfieldId"
    UNTERMINATED_FIELD = "UnterminatedField"
    HEADER_CHECKSUM_MISMATCH = "HeaderChecksumMismatch"
    INFLATE_ERROR = "InflateError"
    DATA_CHECKSUM_MISMATCH = "DataChecksumMismatch"
    SIZE_MISMATCH = "SizeMismatch"


# =============================================================================
# Errors
# =============================================================================

class GzipError(Exception):
    """Base class for gzip container errors"""
    reason: FailureReason

class TooShortError(GzipError):
    """Raised when the buffer is shorter than the currently required minimum"""
    reason = FailureReason.TOO_SHORT

class BadMagicError(GzipError):
    """Raised when the signature or compression method is wrong"""
    reason = FailureReason.BAD_MAGIC

class ReservedFlagSetError(GzipError):
    """Raised when any reserved FLG bit is set"""
    reason = FailureReason.RESERVED_FLAG_SET

class ReservedSubfieldIdError(GzipError):
    """Raised when the FEXTRA subfield id 2 is zero"""
    reason = FailureReason.RESERVED_SUBFIELD_ID

class UnterminatedFieldError(GzipError):
    """Raised when FNAME or FCOMMENT has no terminating zero byte"""
    reason = FailureReason.UNTERMINATED_FIELD

class HeaderChecksumMismatchError(GzipError):
    """Raised when the stored header CRC16 does not match"""
    reason = FailureReason.HEADER_CHECKSUM_MISMATCH

class InflateError(GzipError):
    """Raised when the payload is not valid raw deflate data"""
    reason = FailureReason.INFLATE_ERROR

class DataChecksumMismatchError(GzipError):
    """Raised when the trailer CRC-32 does not match the decompressed data"""
    reason = FailureReason.DATA_CHECKSUM_MISMATCH

class SizeMismatchError(GzipError):
    """Raised when the trailer ISIZE does not match the decompressed length"""
    reason = FailureReason.SIZE_MISMATCH
