"""Transaction building against a Hydra head's ledger."""

from .adapter import (
    AdaptedInput, AssetMap, adapt_input, flatten_value, split_utxo_id,
    to_transaction_input, to_value,
)
from .session import (
    FeePreset, LedgerSession, LedgerSessionError, SessionNotInitializedError,
    load_signing_key, require_session,
)
from .transactions import REFERENCE_MIN_LOVELACE, create_reference_token, update_metadata

__all__ = [
    "AdaptedInput", "AssetMap", "adapt_input", "flatten_value", "split_utxo_id",
    "to_transaction_input", "to_value",
    "FeePreset", "LedgerSession", "LedgerSessionError", "SessionNotInitializedError",
    "load_signing_key", "require_session",
    "REFERENCE_MIN_LOVELACE", "create_reference_token", "update_metadata",
]
