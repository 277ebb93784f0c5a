from .abi_gzip import ExtraField, GzipHeader, parse_header
from .container import GzipContainer, decompress, is_gzip, parse
from .types import (
    BadMagicError,
    DataChecksumMismatchError,
    FailureReason,
    GzipError,
    HeaderChecksumMismatchError,
    InflateError,
    ReservedFlagSetError,
    ReservedSubfieldIdError,
    SizeMismatchError,
    TooShortError,
    UnterminatedFieldError,
)
from .utils import inflate_raw
from .validate import ParseOptions

__all__ = [
    'parse',
    'parse_header',
    'is_gzip',
    'decompress',
    'inflate_raw',
    'GzipContainer',
    'GzipHeader',
    'ExtraField',
    'ParseOptions',
    'FailureReason',
    'GzipError',
    'TooShortError',
    'BadMagicError',
    'ReservedFlagSetError',
    'ReservedSubfieldIdError',
    'UnterminatedFieldError',
    'HeaderChecksumMismatchError',
    'InflateError',
    'DataChecksumMismatchError',
    'SizeMismatchError',
]
