"""Canonical CIP-68 metadata maps (UTF-8 byte keys and leaves)."""

import logging
from typing import Any, Dict, List, Union

from pycardano.serialization import ByteString

from .values import MetadataKind, MetadataValue

logger = logging.getLogger(__name__)

CanonicalDatumMap = Dict[ByteString, Any]
CanonicalValue = Union[ByteString, CanonicalDatumMap, List[CanonicalDatumMap]]


class MetadataError(Exception):
    """Base exception for metadata errors."""

class UnsupportedMetadataShape(MetadataError):
    """Composite metadata that cannot be turned into a datum map."""


def encode_text(text: str) -> ByteString:
    """UTF-8 bytes, chunked by 64 when serialized as Plutus data. Compares equal to plain bytes."""
    return ByteString(text.encode("utf-8"))


def canonicalize(metadata: Any) -> CanonicalDatumMap:
    """
    Convert metadata into a canonical datum map.

    Accepts a raw mapping or an already classified MetadataValue.
    Key order follows the input; nothing is sorted.
    """
    node = metadata if isinstance(metadata, MetadataValue) else MetadataValue.from_raw(metadata)
    if node.kind is not MetadataKind.MAPPING:
        raise UnsupportedMetadataShape(f"Metadata must be a mapping, got {node.kind.value}")
    return _canonical_map(node)


def _canonical_map(node: MetadataValue) -> CanonicalDatumMap:
    return {encode_text(key): _canonical_value(key, child) for key, child in node.items}


def _canonical_value(key: str, node: MetadataValue) -> CanonicalValue:
    if node.kind is MetadataKind.MAPPING:
        return _canonical_map(node)

    if node.kind is MetadataKind.SEQUENCE:
        # every element is walked as a full metadata mapping
        items = []
        for index, item in enumerate(node.value):
            if item.kind is not MetadataKind.MAPPING:
                raise UnsupportedMetadataShape(
                    f"'{key}'[{index}] is {item.kind.value}; list elements must be mappings"
                )
            items.append(_canonical_map(item))
        return items

    if node.kind is MetadataKind.OTHER:
        logger.warning(f"Unhandled metadata type {type(node.value).__name__} for '{key}', storing as text")
    return encode_text(node.text)
