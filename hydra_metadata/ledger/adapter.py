"""Convert Hydra snapshot outputs into transaction-ready shapes."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from pycardano import MultiAsset, TransactionId, TransactionInput, Value

from hydra_metadata.types import LOVELACE, Token
from hydra_metadata.hydra.snapshot import OutputRecord

AssetMap = Dict[str, int]


@dataclass(frozen=True)
class AdaptedInput:
    """A snapshot output normalized for transaction building."""
    tx_hash: str
    output_index: int
    address: str
    assets: AssetMap
    datum: Optional[str] = None
    datum_hash: Optional[str] = None
    script_ref: Optional[Any] = None

    @property
    def utxo_id(self) -> str:
        return f"{self.tx_hash}#{self.output_index}"


def flatten_value(value: Mapping[str, Any]) -> AssetMap:
    """
    Flatten {policy: {name: qty}} into {policy + name: qty}.

    "lovelace" is kept under its own key.
    """
    assets: AssetMap = {LOVELACE: int(value.get(LOVELACE, 0))}
    for policy_id, tokens in value.items():
        if policy_id == LOVELACE:
            continue
        for token_name, quantity in tokens.items():
            assets[f"{policy_id}{token_name}"] = int(quantity)
    return assets


def split_utxo_id(utxo_id: str) -> tuple[str, int]:
    tx_hash, sep, index = utxo_id.partition("#")
    if not sep or not tx_hash or not index:
        raise ValueError(f"Invalid UTxO id (expected <txhash>#<index>): {utxo_id}")
    return tx_hash, int(index)


def adapt_input(record: OutputRecord, utxo_id: Optional[str] = None) -> AdaptedInput:
    tx_hash, output_index = split_utxo_id(utxo_id or record.utxo_id)
    return AdaptedInput(
        tx_hash=tx_hash,
        output_index=output_index,
        address=record.address,
        assets=flatten_value(record.value),
        datum=record.datum or None,
        datum_hash=record.datumhash or None,
        script_ref=record.reference_script or None,
    )


def to_transaction_input(adapted: AdaptedInput) -> TransactionInput:
    return TransactionInput(TransactionId(bytes.fromhex(adapted.tx_hash)), adapted.output_index)


def to_value(assets: Mapping[str, int]) -> Value:
    """Rebuild a pycardano Value from a flattened asset map (zero quantities dropped)."""
    multi: Dict[bytes, Dict[bytes, int]] = {}
    for unit, quantity in assets.items():
        if unit == LOVELACE or quantity == 0:
            continue
        token = Token.from_unit(unit)
        multi.setdefault(bytes.fromhex(token.policy_id), {})[bytes.fromhex(token.name)] = int(quantity)
    coin = int(assets.get(LOVELACE, 0))
    if not multi:
        return Value(coin)
    return Value(coin, MultiAsset.from_primitive(multi))
