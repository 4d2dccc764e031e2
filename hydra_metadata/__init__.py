"""
CIP-68 metadata updates inside a Hydra head.

Structure:
    hydra_metadata/
    ├── types.py          # Token
    ├── cip68/            # Metadata canonicalization, CIP-68 datum
    ├── hydra/            # Hydra node client, snapshot matching
    └── ledger/           # Input/value adapters, session, transactions

Usage:
    from hydra_metadata import Token
    from hydra_metadata.cip68 import build_datum
    from hydra_metadata.hydra import HydraClient, MatchCriteria
    from hydra_metadata.ledger import LedgerSession, update_metadata
"""

from .types import Token, LOVELACE

__all__ = [
    # Types
    "Token",
    "LOVELACE",
]
