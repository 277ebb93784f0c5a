"""
Gzip container parsing entry points.

A container is parsed in one forward pass: header, optional fields,
payload location, decompression, trailer validation. Any failure raises a
``GzipError`` subclass and no container is returned.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .abi_gzip import GzipHeader, read_header
from .cursor import ByteCursor
from .types import GzipError
from .validate import ParseOptions, locate_payload, read_trailer, validate_trailer

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class GzipContainer:
    """
    A fully validated single-member gzip container.

    The compressed payload occupies ``[payload_start, payload_end)`` of the
    input buffer; ``data`` holds the decompressed bytes.
    """
    header: GzipHeader
    payload_start: int
    payload_end: int
    crc32: int  # trailer CRC-32 of the decompressed data
    isize: int  # trailer decompressed length mod 2^32
    data: bytes

    @property
    def payload_size(self) -> int:
        return self.payload_end - self.payload_start

    def __str__(self) -> str:
        return (
            f"GzipContainer(\n"
            f"  header={self.header},\n"
            f"  payload=[{self.payload_start}:{self.payload_end}],\n"
            f"  crc32=0x{self.crc32:08x},\n"
            f"  isize={self.isize}\n"
            f")"
        )

    @classmethod
    def from_bytes(cls, data: BytesLike, options: Optional[ParseOptions] = None) -> "GzipContainer":
        return parse(data, options)


def parse(data: BytesLike, options: Optional[ParseOptions] = None) -> GzipContainer:
    """
    Parse and validate a gzip container held entirely in memory.

    Args:
        data: The complete gzip container
        options: Decompression options; defaults to raw inflate with no size cap

    Returns:
        The validated GzipContainer

    Raises:
        GzipError: On the first failed check. The ``reason`` attribute of
            the exception names which check failed.

    Example:
        >>> container = parse(gzip.compress(b"hello"))
        >>> container.data
        b'hello'
    """
    if options is None:
        options = ParseOptions()
    data = bytes(data)

    try:
        cursor = ByteCursor(data)
        header = read_header(cursor)
        logger.debug("Parsed gzip header: %s", header)

        payload_start, payload_end = locate_payload(cursor.position, cursor.size)
        logger.debug("Located payload at [%d:%d]", payload_start, payload_end)

        decompressed = options.get_inflater()(data[payload_start:payload_end])
        crc32, isize = read_trailer(data)
        validate_trailer(decompressed, crc32, isize)
    except GzipError as e:
        logger.debug("Rejected gzip container (%s): %s", e.reason.value, e)
        raise

    logger.debug("Validated gzip container: %d bytes decompressed", len(decompressed))
    return GzipContainer(
        header=header,
        payload_start=payload_start,
        payload_end=payload_end,
        crc32=crc32,
        isize=isize,
        data=decompressed,
    )


def is_gzip(data: BytesLike, options: Optional[ParseOptions] = None) -> bool:
    """Return True if ``data`` is a valid single-member gzip container."""
    try:
        parse(data, options)
    except GzipError:
        return False
    return True


def decompress(data: BytesLike, options: Optional[ParseOptions] = None) -> bytes:
    """Validate a gzip container and return its decompressed contents."""
    return parse(data, options).data
