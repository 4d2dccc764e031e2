"""Tests for CIP-68 datum building."""

import cbor2
import pytest

from hydra_metadata.cip68 import (
    CIP68_VERSION, CIP68Datum, MetadataSerializationError, UnsupportedMetadataShape,
    build_datum, canonicalize,
)


def test_build_datum_wraps_canonical_metadata():
    datum = build_datum({"name": "t"}, 1)
    assert isinstance(datum, CIP68Datum)
    assert datum.metadata == canonicalize({"name": "t"})
    assert datum.version == 1


def test_default_version():
    assert build_datum({"name": "t"}).version == CIP68_VERSION == 1


def test_custom_version():
    assert build_datum({"name": "t"}, 2).version == 2


def test_failure_is_wrapped_with_cause():
    with pytest.raises(MetadataSerializationError) as exc_info:
        build_datum({"tags": ["a", "b"]})
    assert isinstance(exc_info.value.__cause__, UnsupportedMetadataShape)


def test_non_mapping_metadata_is_wrapped():
    with pytest.raises(MetadataSerializationError):
        build_datum(["a"])


def test_datum_serializes_as_constructor_zero():
    datum = build_datum({
        "name": "t",
        "files": [{"src": "ipfs://abc", "mediaType": "image/png"}],
        "attributes": {"luck": 1},
    })
    decoded = cbor2.loads(datum.to_cbor())

    assert decoded.tag == 121  # Constr 0
    metadata, version = decoded.value
    assert version == 1
    assert metadata[b"name"] == b"t"
    assert list(metadata[b"files"]) == [{b"src": b"ipfs://abc", b"mediaType": b"image/png"}]
    assert metadata[b"attributes"] == {b"luck": b"1"}


def test_long_text_is_chunked():
    raw = build_datum({"description": "x" * 100}).to_cbor()
    # indefinite-length byte string, first chunk 64 bytes
    assert b"\x5f\x58\x40" in raw
    metadata, _ = cbor2.loads(raw).value
    assert metadata[b"description"] == b"x" * 100


def test_long_key_is_chunked():
    key = "k" * 80
    raw = build_datum({key: "v"}).to_cbor()
    assert b"\x5f\x58\x40" in raw
    metadata, _ = cbor2.loads(raw).value
    assert metadata[key.encode()] == b"v"


def test_runaway_nesting_is_wrapped():
    metadata = {"name": "leaf"}
    for _ in range(3000):
        metadata = {"child": metadata}
    with pytest.raises(MetadataSerializationError) as exc_info:
        build_datum(metadata)
    assert isinstance(exc_info.value.__cause__, RecursionError)


class Unprintable:
    def __str__(self):
        raise RuntimeError("no text form")


def test_unprintable_value_is_wrapped():
    with pytest.raises(MetadataSerializationError) as exc_info:
        build_datum({"name": Unprintable()})
    assert isinstance(exc_info.value.__cause__, RuntimeError)
