import struct
import zlib
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Tuple

from .types import (
    ISIZE_MODULUS,
    TRAILER_SIZE,
    DataChecksumMismatchError,
    SizeMismatchError,
    TooShortError,
)
from .utils import inflate_raw

Inflater = Callable[[bytes], bytes]


@dataclass
class ParseOptions:
    """
    Options for parsing a gzip container.
    Any attribute left as ``None`` falls back to the default behaviour.
    """
    # Raw inflate collaborator; must raise InflateError on invalid input
    inflate: Optional[Inflater] = None
    # Output cap for the default collaborator; ignored for a custom one
    max_decompressed_size: Optional[int] = None

    def get_inflater(self) -> Inflater:
        if self.inflate is not None:
            return self.inflate
        return partial(inflate_raw, max_size=self.max_decompressed_size)


def locate_payload(header_end: int, size: int) -> Tuple[int, int]:
    """
    Return the ``(start, end)`` range of the compressed payload, which lies
    between the end of the header and the 8-byte trailer.
    """
    payload_end = size - TRAILER_SIZE
    if payload_end < header_end:
        raise TooShortError(
            f"No room for trailer: header ends at {header_end}, "
            f"buffer is {size} bytes"
        )
    return header_end, payload_end


def read_trailer(data: bytes) -> Tuple[int, int]:
    """Return the trailer ``(crc32, isize)``, both u32 little-endian."""
    return struct.unpack_from("<II", data, len(data) - TRAILER_SIZE)


def validate_trailer(decompressed: bytes, crc32: int, isize: int) -> None:
    """
    Check the trailer values against the decompressed data.
    The CRC-32 is checked before ISIZE.
    """
    actual_crc = zlib.crc32(decompressed) & 0xFFFFFFFF
    if actual_crc != crc32:
        raise DataChecksumMismatchError(
            f"Data CRC-32 mismatch: trailer 0x{crc32:08x}, computed 0x{actual_crc:08x}"
        )

    actual_size = len(decompressed) % ISIZE_MODULUS
    if actual_size != isize:
        raise SizeMismatchError(
            f"ISIZE mismatch: trailer {isize}, decompressed length mod 2^32 is {actual_size}"
        )
