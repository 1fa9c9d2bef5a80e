"""MessagePack codec for minipack.

This module provides encoding and decoding between the value model and the
MessagePack wire format.
"""

from __future__ import annotations

from .decoder import Decoder, decode, decode_from, iter_decode, unpack
from .encoder import Encoder, encode, encode_into, pack
from .tags import TAGS, Family, Tag, lookup

__all__ = [
    "Encoder",
    "Decoder",
    "encode",
    "encode_into",
    "pack",
    "decode",
    "decode_from",
    "iter_decode",
    "unpack",
    "Family",
    "Tag",
    "TAGS",
    "lookup",
]
