"""Hydra head access."""

from .client import (
    HydraClient, HydraError, HydraConnectionError, SnapshotFetchError, HydraSubmitError,
    websocket_url,
)
from .snapshot import MatchCriteria, OutputRecord, UTxOSnapshot, find_utxo, iter_outputs

__all__ = [
    "HydraClient", "HydraError", "HydraConnectionError", "SnapshotFetchError", "HydraSubmitError",
    "websocket_url",
    "MatchCriteria", "OutputRecord", "UTxOSnapshot", "find_utxo", "iter_outputs",
]
