"""
Shared utility functions for gzip container parsing.

This module has no dependencies beyond ``types``, so any module
can import from it without risk of circular imports.
"""

import zlib
from typing import Optional

from .types import InflateError


def inflate_raw(data: bytes, max_size: Optional[int] = None) -> bytes:
    """Decompress a raw DEFLATE stream (no zlib or gzip framing).

    Args:
        data: Raw deflate-compressed bytes
        max_size: Maximum allowed decompressed size, ``None`` for no limit

    Returns:
        Decompressed bytes

    Raises:
        InflateError: If the data is not one complete deflate stream, or the
            output exceeds max_size
    """
    decompressor = zlib.decompressobj(-zlib.MAX_WBITS)
    try:
        if max_size is None:
            result = decompressor.decompress(data) + decompressor.flush()
        else:
            result = decompressor.decompress(data, max_size + 1)
            # flush() would inflate unconsumed_tail without a limit
            if len(result) > max_size or decompressor.unconsumed_tail:
                raise InflateError(
                    f"Decompressed payload exceeds maximum size ({max_size} bytes)"
                )
    except zlib.error as e:
        raise InflateError(f"Raw inflate failed: {e}") from e

    if not decompressor.eof:
        raise InflateError("Deflate stream is truncated: no final block")
    if decompressor.unused_data:
        raise InflateError(
            f"{len(decompressor.unused_data)} trailing bytes after end of deflate stream"
        )
    return result
