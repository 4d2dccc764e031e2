"""Hydra head UTxO snapshots and UTxO selection."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

UTxOSnapshot = Mapping[str, Dict[str, Any]]


@dataclass(frozen=True)
class MatchCriteria:
    """Filter for find_utxo. Empty criteria matches the first UTxO."""
    address: Optional[str] = None
    policy_id: Optional[str] = None
    token_name: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return bool(self.policy_id and self.token_name)


@dataclass(frozen=True)
class OutputRecord:
    """
    One output of a head snapshot.

    value: {"lovelace": int, policy_id: {token_name: int}}
    """
    utxo_id: str
    address: str
    value: Dict[str, Any] = field(default_factory=dict)
    datum: Optional[str] = None
    datumhash: Optional[str] = None
    reference_script: Optional[Any] = None

    @classmethod
    def from_snapshot_entry(cls, utxo_id: str, details: Mapping[str, Any]) -> "OutputRecord":
        return cls(
            utxo_id=utxo_id,
            address=details.get("address", ""),
            value=dict(details.get("value") or {}),
            datum=details.get("datum") or None,
            datumhash=details.get("datumhash") or None,
            reference_script=details.get("referenceScript") or None,
        )

    @property
    def lovelace(self) -> int:
        return int(self.value.get("lovelace", 0))

    def quantity_of(self, policy_id: str, token_name: str) -> int:
        tokens = self.value.get(policy_id)
        if not isinstance(tokens, Mapping):
            return 0
        return int(tokens.get(token_name) or 0)


def iter_outputs(snapshot: UTxOSnapshot) -> Iterator[OutputRecord]:
    """Yield OutputRecords in snapshot order."""
    for utxo_id, details in snapshot.items():
        yield OutputRecord.from_snapshot_entry(utxo_id, details)


def find_utxo(snapshot: UTxOSnapshot, criteria: Optional[MatchCriteria] = None) -> Optional[OutputRecord]:
    """
    Return the first UTxO matching criteria, or None.

    Address must match when given. With policy_id and token_name both set
    the UTxO must hold a positive quantity of that token; otherwise the
    first UTxO passing the address filter is returned.
    """
    criteria = criteria or MatchCriteria()

    for record in iter_outputs(snapshot):
        if criteria.address and criteria.address != record.address:
            continue

        if criteria.has_token:
            if record.quantity_of(criteria.policy_id, criteria.token_name) > 0:
                logger.info(f"Found usable UTxO: {record.utxo_id}")
                return record
        else:
            logger.info(f"Returning first UTxO: {record.utxo_id}")
            return record

    logger.info("No suitable UTxO found.")
    return None
