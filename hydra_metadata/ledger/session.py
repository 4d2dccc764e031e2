"""Ledger session: network, fee preset and selected wallet for transaction building."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pycardano import (
    Address, Network, PaymentSigningKey, Transaction, TransactionBody,
    TransactionWitnessSet, VerificationKeyWitness,
)

logger = logging.getLogger(__name__)

NETWORKS = {
    "preview": Network.TESTNET,
    "preprod": Network.TESTNET,
    "mainnet": Network.MAINNET,
}

SigningKeyLike = Union[PaymentSigningKey, str, Path]


class LedgerSessionError(Exception):
    """Base exception for ledger session errors."""

class SessionNotInitializedError(LedgerSessionError):
    """Transaction building attempted without a session or wallet."""


@dataclass(frozen=True)
class FeePreset:
    """Linear fee parameters (fee = min_fee_a * tx_size + min_fee_b). Hydra heads run fee-free."""
    min_fee_a: int = 0
    min_fee_b: int = 0

    def fee_for(self, tx_size: int) -> int:
        return self.min_fee_a * tx_size + self.min_fee_b


def load_signing_key(key: SigningKeyLike) -> PaymentSigningKey:
    """Load a payment signing key from a key object, an .skey file path or CBOR hex."""
    if isinstance(key, PaymentSigningKey):
        return key
    if isinstance(key, Path) or Path(key).is_file():
        return PaymentSigningKey.load(str(key))
    try:
        return PaymentSigningKey.from_cbor(key.strip())
    except Exception as e:
        raise ValueError("Signing key is neither a key file nor CBOR hex") from e


class LedgerSession:
    """
    Explicit ledger client context, built once and passed to every
    transaction-building call.
    """

    def __init__(self, network: str = "Preview", fees: Optional[FeePreset] = None):
        try:
            self.network = NETWORKS[network.lower()]
        except KeyError:
            raise ValueError(f"Unknown network {network!r}, expected one of Preview, Preprod, Mainnet")
        self.network_name = network
        self.fees = fees or FeePreset()
        self._signing_key: Optional[PaymentSigningKey] = None
        logger.info(f"Ledger session initialized for {network}")

    def select_wallet(self, signing_key: SigningKeyLike):
        self._signing_key = load_signing_key(signing_key)
        logger.info(f"Selected wallet {self.wallet_address}")

    @property
    def has_wallet(self) -> bool:
        return self._signing_key is not None

    @property
    def signing_key(self) -> PaymentSigningKey:
        if self._signing_key is None:
            raise SessionNotInitializedError("No wallet selected; call select_wallet() first")
        return self._signing_key

    @property
    def wallet_address(self) -> Address:
        return Address(payment_part=self.signing_key.to_verification_key().hash(), network=self.network)

    def sign(self, body: TransactionBody) -> Transaction:
        """Witness a transaction body with the selected wallet key."""
        key = self.signing_key
        signature = key.sign(body.hash())
        witness = VerificationKeyWitness(key.to_verification_key(), signature)
        return Transaction(body, TransactionWitnessSet(vkey_witnesses=[witness]))


def require_session(session: Optional[LedgerSession]) -> LedgerSession:
    if session is None:
        raise SessionNotInitializedError("Ledger session is not initialized")
    return session
