"""CIP-68 reference token datum."""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict

from pycardano import PlutusData

from .canonical import MetadataError, canonicalize

CIP68_VERSION = 1


class MetadataSerializationError(MetadataError):
    """Metadata could not be serialized into a datum."""


@dataclass
class CIP68Datum(PlutusData):
    """Datum: metadata map, schema version."""
    metadata: Dict[Any, Any]
    version: int
    CONSTR_ID: ClassVar[int] = 0


def build_datum(metadata: Any, version: int = CIP68_VERSION) -> CIP68Datum:
    """
    Canonicalize metadata and wrap it with the schema version.

    The datum is encoded once here so every failure, including CBOR
    encoding and runaway nesting, surfaces as MetadataSerializationError.
    """
    try:
        datum = CIP68Datum(metadata=canonicalize(metadata), version=int(version))
        datum.to_cbor()
    except Exception as e:
        raise MetadataSerializationError(f"Metadata contains unsupported types: {e!r}") from e
    return datum
