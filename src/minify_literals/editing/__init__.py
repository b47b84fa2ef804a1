"""Edit buffer and source map generation."""

from .buffer import EditBuffer, EditBufferLike
from .sourcemap import SourceMap, encode_mappings, encode_vlq

__all__ = [
    "EditBuffer",
    "EditBufferLike",
    "SourceMap",
    "encode_mappings",
    "encode_vlq",
]
