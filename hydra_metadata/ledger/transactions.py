"""Build and sign CIP-68 metadata transactions inside a Hydra head."""

import logging
from typing import Any, List, Optional

from pycardano import Address, Transaction, TransactionBody, TransactionOutput, VerificationKeyHash

from hydra_metadata.cip68 import CIP68Datum, MetadataSerializationError, build_datum
from hydra_metadata.hydra.snapshot import OutputRecord
from hydra_metadata.types import LOVELACE, Token
from .adapter import AdaptedInput, AssetMap, adapt_input, to_transaction_input, to_value
from .session import LedgerSession, SigningKeyLike, require_session

logger = logging.getLogger(__name__)

REFERENCE_MIN_LOVELACE = 2_000_000


def update_metadata(
    session: Optional[LedgerSession],
    policy_id: str,
    token_name: str,
    metadata: Any,
    utxo: OutputRecord,
    signing_key: Optional[SigningKeyLike] = None,
) -> Transaction:
    """
    Rewrite the CIP-68 datum of the UTxO holding policy_id.token_name.

    The UTxO is spent back to its own address with its full value and the
    new inline datum. Returns the signed transaction.
    """
    session = require_session(session)
    if signing_key is not None:
        session.select_wallet(signing_key)
    session.signing_key  # no wallet selected: fail before any work

    datum = _datum_for(metadata)
    if utxo.quantity_of(policy_id, token_name) <= 0:
        raise ValueError(f"UTxO {utxo.utxo_id} does not hold {Token(policy_id, token_name)}")

    adapted = adapt_input(utxo)
    _check_owner(session, adapted)
    output = TransactionOutput(Address.decode(adapted.address), to_value(adapted.assets), datum=datum)
    return _build_and_sign(session, adapted, [output])


def create_reference_token(
    session: Optional[LedgerSession],
    policy_id: str,
    token_name: str,
    metadata: Any,
    address: str,
    utxo: OutputRecord,
    lovelace: int = REFERENCE_MIN_LOVELACE,
) -> Transaction:
    """
    Lock one unit of policy_id.token_name at address with a CIP-68 datum.

    Everything else in the spent UTxO returns to its owner address.
    """
    session = require_session(session)
    session.signing_key  # no wallet selected: fail before any work
    datum = _datum_for(metadata)

    unit = Token(policy_id, token_name).unit
    adapted = adapt_input(utxo)
    _check_owner(session, adapted)
    if adapted.assets.get(unit, 0) <= 0:
        raise ValueError(f"UTxO {utxo.utxo_id} does not hold {Token(policy_id, token_name)}")
    if adapted.assets[LOVELACE] < lovelace:
        raise ValueError(f"UTxO {utxo.utxo_id} holds {adapted.assets[LOVELACE]} lovelace, need {lovelace}")

    reference: AssetMap = {LOVELACE: lovelace, unit: 1}
    change = dict(adapted.assets)
    change[LOVELACE] -= lovelace
    change[unit] -= 1

    outputs = [TransactionOutput(Address.decode(address), to_value(reference), datum=datum)]
    if any(quantity for quantity in change.values()):
        outputs.append(TransactionOutput(Address.decode(adapted.address), to_value(change)))
    return _build_and_sign(session, adapted, outputs)


def _datum_for(metadata: Any) -> CIP68Datum:
    try:
        datum = build_datum(metadata)
    except MetadataSerializationError as e:
        logger.error(f"Error serializing metadata to Plutus format: {e}")
        raise
    logger.info(f"Datum is {datum.to_cbor_hex()}")
    return datum


def _check_owner(session: LedgerSession, adapted: AdaptedInput):
    """The selected wallet must be able to witness a key-locked input."""
    owner = Address.decode(adapted.address).payment_part
    if isinstance(owner, VerificationKeyHash) and owner != session.wallet_address.payment_part:
        raise ValueError(f"UTxO {adapted.utxo_id} is not owned by the selected wallet {session.wallet_address}")


def _build_and_sign(session: LedgerSession, adapted: AdaptedInput, outputs: List[TransactionOutput]) -> Transaction:
    """
    Assemble a single-input body, sign it and charge the fee to the last output.

    The fee is sized on the signed transaction; re-sign until it covers
    the transaction's own size.
    """
    body = TransactionBody(inputs=[to_transaction_input(adapted)], outputs=outputs, fee=0)
    tx = session.sign(body)

    required = session.fees.fee_for(len(tx.to_cbor()))
    while required > body.fee:
        change = list(body.outputs)[-1]
        extra = required - body.fee
        if change.amount.coin < extra:
            raise ValueError(f"Output holds {change.amount.coin} lovelace, cannot cover fee {required}")
        change.amount.coin -= extra
        body.fee = required
        tx = session.sign(body)
        required = session.fees.fee_for(len(tx.to_cbor()))

    logger.info(f"Built transaction {tx.id} spending {adapted.utxo_id}")
    return tx
