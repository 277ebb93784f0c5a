"""
Unit tests for payload location and trailer validation (validate.py).
"""

import struct
import zlib

import pytest

from gzcontainer.types import (
    DataChecksumMismatchError,
    InflateError,
    SizeMismatchError,
    TooShortError,
)
from gzcontainer.validate import (
    ParseOptions,
    locate_payload,
    read_trailer,
    validate_trailer,
)

from builders import deflate_raw


class TestLocatePayload:
    """Test the payload byte range."""

    def test_range_excludes_trailer(self):
        """The last 8 bytes never belong to the payload."""
        assert locate_payload(10, 30) == (10, 22)

    def test_empty_range(self):
        """A header followed directly by the trailer gives an empty range."""
        assert locate_payload(10, 18) == (10, 10)

    def test_no_room_for_trailer(self):
        """A header ending inside the trailer region is too short."""
        with pytest.raises(TooShortError, match="No room for trailer"):
            locate_payload(12, 19)


class TestReadTrailer:
    """Test trailer decoding."""

    def test_little_endian(self):
        """CRC-32 and ISIZE are u32 little-endian."""
        data = b'\xaa' * 5 + b'\x78\x56\x34\x12' + b'\x04\x03\x02\x01'
        assert read_trailer(data) == (0x12345678, 0x01020304)

    def test_high_bit_values(self):
        """Values above 2^31 stay unsigned."""
        data = struct.pack('<II', 0xFFFFFFFF, 0x80000000)
        assert read_trailer(data) == (0xFFFFFFFF, 0x80000000)


class TestValidateTrailer:
    """Test trailer comparison."""

    def test_valid(self):
        """Matching CRC and size pass."""
        data = b'hello world'
        validate_trailer(data, zlib.crc32(data), len(data))

    def test_empty_data(self):
        """Empty data has CRC 0 and size 0."""
        validate_trailer(b'', 0, 0)

    def test_crc_mismatch(self):
        """A wrong CRC-32 is rejected."""
        data = b'hello world'
        with pytest.raises(DataChecksumMismatchError, match="Data CRC-32 mismatch"):
            validate_trailer(data, zlib.crc32(data) ^ 1, len(data))

    def test_size_mismatch(self):
        """A wrong ISIZE is rejected."""
        data = b'hello world'
        with pytest.raises(SizeMismatchError, match="ISIZE mismatch"):
            validate_trailer(data, zlib.crc32(data), len(data) + 1)

    def test_crc_checked_before_size(self):
        """When both are wrong the CRC failure is reported."""
        data = b'hello world'
        with pytest.raises(DataChecksumMismatchError):
            validate_trailer(data, zlib.crc32(data) ^ 1, len(data) + 1)

    def test_size_compared_as_full_value(self):
        """ISIZE differing only above the low byte is still a mismatch."""
        data = b'x' * 3
        with pytest.raises(SizeMismatchError):
            validate_trailer(data, zlib.crc32(data), 3 + 256)


class TestParseOptions:
    """Test collaborator selection."""

    def test_default_inflater(self):
        """The default inflater is raw inflate."""
        inflater = ParseOptions().get_inflater()
        assert inflater(deflate_raw(b'abc')) == b'abc'

    def test_default_inflater_respects_cap(self):
        """max_decompressed_size is passed to the default inflater."""
        inflater = ParseOptions(max_decompressed_size=2).get_inflater()

        with pytest.raises(InflateError):
            inflater(deflate_raw(b'abc'))

    def test_custom_inflater(self):
        """A custom collaborator replaces the default."""
        def fake_inflate(data: bytes) -> bytes:
            return data[::-1]

        options = ParseOptions(inflate=fake_inflate, max_decompressed_size=1)
        assert options.get_inflater()(b'abc') == b'cba'
