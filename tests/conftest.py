import json
from pathlib import Path

import pytest
from pycardano import Address, Network, PaymentSigningKey

from hydra_metadata.ledger import LedgerSession

FIXTURES = Path(__file__).parent / "fixtures"

POLICY_ID = "552300d630a1f986199133af0d51e07962fbf8bbbadf91888da461ab"
OTHER_POLICY_ID = "9da63b554a9a658f367e296438588cf5383aaea5ba90ce766330933c"
TOKEN_NAME = "5265666572656e6365546f6b656e"  # "ReferenceToken"
OTHER_TOKEN_NAME = "4f74686572"  # "Other"
TX_HASH = "6f16f07889916bd52986925153647fe81c69e2206c7780aeb1c668fd0326d5aa"


@pytest.fixture
def snapshot() -> dict:
    """Pinned snapshot; json preserves entry order."""
    with open(FIXTURES / "snapshot_utxo.json") as f:
        return json.load(f)


@pytest.fixture
def signing_key() -> PaymentSigningKey:
    return PaymentSigningKey.generate()


@pytest.fixture
def wallet_address(signing_key) -> str:
    vkey = signing_key.to_verification_key()
    return str(Address(payment_part=vkey.hash(), network=Network.TESTNET))


@pytest.fixture
def session(signing_key) -> LedgerSession:
    session = LedgerSession("Preview")
    session.select_wallet(signing_key)
    return session


@pytest.fixture
def wallet_snapshot(wallet_address) -> dict:
    """Snapshot whose outputs sit at a decodable wallet address."""
    return {
        f"{TX_HASH}#1": {
            "address": wallet_address,
            "value": {
                "lovelace": 5_000_000,
                POLICY_ID: {TOKEN_NAME: 1},
                OTHER_POLICY_ID: {OTHER_TOKEN_NAME: 50},
            },
            "datum": None,
            "datumhash": None,
            "referenceScript": None,
        },
    }
