"""Tests for the ledger session."""

import pytest
from pycardano import Network, PaymentSigningKey

from hydra_metadata.ledger import (
    FeePreset, LedgerSession, SessionNotInitializedError, load_signing_key, require_session,
)


class TestLedgerSession:

    @pytest.mark.parametrize("name, network", [
        ("Preview", Network.TESTNET),
        ("preprod", Network.TESTNET),
        ("Mainnet", Network.MAINNET),
    ])
    def test_networks(self, name, network):
        assert LedgerSession(name).network == network

    def test_unknown_network(self):
        with pytest.raises(ValueError, match="Unknown network"):
            LedgerSession("Sanchonet")

    def test_zero_fee_by_default(self):
        assert LedgerSession().fees.fee_for(10_000) == 0

    def test_fee_preset(self):
        assert FeePreset(min_fee_a=44, min_fee_b=155381).fee_for(200) == 44 * 200 + 155381

    def test_wallet_required(self):
        session = LedgerSession()
        assert not session.has_wallet
        with pytest.raises(SessionNotInitializedError):
            session.signing_key
        with pytest.raises(SessionNotInitializedError):
            session.wallet_address

    def test_select_wallet(self, signing_key, wallet_address):
        session = LedgerSession()
        session.select_wallet(signing_key)
        assert session.has_wallet
        assert str(session.wallet_address) == wallet_address
        assert str(session.wallet_address).startswith("addr_test")

    def test_require_session(self):
        with pytest.raises(SessionNotInitializedError):
            require_session(None)
        session = LedgerSession()
        assert require_session(session) is session


class TestLoadSigningKey:

    def test_key_object(self, signing_key):
        assert load_signing_key(signing_key) is signing_key

    def test_cbor_hex(self, signing_key):
        loaded = load_signing_key(signing_key.to_cbor_hex())
        assert loaded.payload == signing_key.payload

    def test_key_file(self, signing_key, tmp_path):
        path = tmp_path / "payment.skey"
        signing_key.save(str(path))
        assert load_signing_key(str(path)).payload == signing_key.payload
        assert load_signing_key(path).payload == signing_key.payload

    def test_garbage(self):
        with pytest.raises(ValueError):
            load_signing_key("not a key")

    def test_loaded_key_type(self, signing_key):
        assert isinstance(load_signing_key(signing_key.to_cbor_hex()), PaymentSigningKey)
