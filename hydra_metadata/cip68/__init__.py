"""CIP-68 metadata canonicalization and datum building."""

from .canonical import (
    CanonicalDatumMap, MetadataError, UnsupportedMetadataShape,
    canonicalize, encode_text,
)
from .datum import CIP68_VERSION, CIP68Datum, MetadataSerializationError, build_datum
from .values import MetadataKind, MetadataValue, format_number, to_text

__all__ = [
    "CanonicalDatumMap", "MetadataError", "UnsupportedMetadataShape",
    "canonicalize", "encode_text",
    "CIP68_VERSION", "CIP68Datum", "MetadataSerializationError", "build_datum",
    "MetadataKind", "MetadataValue", "format_number", "to_text",
]
