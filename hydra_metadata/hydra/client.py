"""Hydra node client: HTTP snapshot queries and WebSocket transaction submission."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import requests
import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed

from .snapshot import MatchCriteria, OutputRecord, find_utxo

logger = logging.getLogger(__name__)

TX_TYPE = "Tx ConwayEra"
VERDICT_TAGS = ("TxValid", "TxInvalid", "CommandFailed")


class HydraError(Exception):
    """Base exception for Hydra node errors."""

class HydraConnectionError(HydraError):
    """Connection-related errors."""

class SnapshotFetchError(HydraError):
    """Snapshot could not be retrieved or parsed."""

class HydraSubmitError(HydraError):
    """Transaction rejected by the head, or no verdict received."""


def websocket_url(node_url: str) -> str:
    """Derive the node's WebSocket API URL from its HTTP URL."""
    url = node_url.rstrip("/")
    if url.startswith("https://"):
        url = "wss://" + url[len("https://"):]
    elif url.startswith("http://"):
        url = "ws://" + url[len("http://"):]
    return f"{url}/?history=no"


class HydraClient:
    """Client for a single hydra-node (REST snapshot + WebSocket API)."""

    def __init__(self, url: str = "http://localhost:4001", ws_url: Optional[str] = None, timeout: float = 10.0):
        self.url = url.rstrip("/")
        self.ws_url = ws_url or websocket_url(self.url)
        self.timeout = timeout
        self._ws: Optional[ClientConnection] = None

    # ---- snapshot ----

    def get_snapshot_utxo(self) -> Dict[str, Dict[str, Any]]:
        """GET /snapshot/utxo. Raises SnapshotFetchError on any failure, no retry."""
        endpoint = f"{self.url}/snapshot/utxo"
        try:
            response = requests.get(endpoint, timeout=self.timeout)
            response.raise_for_status()
            utxos = response.json()
        except requests.RequestException as e:
            logger.error(f"Error querying Hydra UTxOs: {e}")
            raise SnapshotFetchError(f"Failed to query Hydra UTxOs from {endpoint}: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid snapshot JSON from {endpoint}: {e}")
            raise SnapshotFetchError(f"Invalid snapshot response from {endpoint}") from e

        if not isinstance(utxos, dict):
            raise SnapshotFetchError(f"Expected a UTxO object from {endpoint}, got {type(utxos).__name__}")

        logger.info(f"Hydra snapshot holds {len(utxos)} UTxOs")
        return utxos

    def get_usable_utxo(self, criteria: Optional[MatchCriteria] = None) -> Optional[OutputRecord]:
        """Fetch the snapshot and return the first UTxO matching criteria (None if none)."""
        return find_utxo(self.get_snapshot_utxo(), criteria)

    # ---- websocket ----

    async def connect(self) -> bool:
        """Connect to the node's WebSocket API. Returns True on success."""
        try:
            self._ws = await websockets.connect(self.ws_url, max_size=50 * 1024 * 1024)
            logger.info(f"Connected to Hydra node at {self.ws_url}")
            return True
        except ConnectionRefusedError:
            logger.error(f"Connection refused. Is hydra-node running at {self.ws_url}?")
            return False
        except Exception as e:
            logger.error(f"Failed to connect to Hydra node: {e}")
            return False

    async def disconnect(self):
        if self._ws:
            await self._ws.close()
            self._ws = None
            logger.info("Disconnected from Hydra node")

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def __aenter__(self):
        if not await self.connect():
            raise HydraConnectionError(f"Failed to connect to {self.ws_url}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    async def submit_transaction(self, tx_cbor: str, tx_id: str = "", timeout: float = 30.0) -> str:
        """
        Send NewTx and wait for the head's verdict.

        Returns the transaction id on TxValid, raises HydraSubmitError otherwise.
        """
        if not self._ws:
            raise HydraConnectionError("Not connected to Hydra node")

        command = {
            "tag": "NewTx",
            "transaction": {"type": TX_TYPE, "description": "", "cborHex": tx_cbor},
        }
        try:
            await self._ws.send(json.dumps(command))
            message = await asyncio.wait_for(self._wait_for_verdict(tx_id), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise HydraSubmitError(f"No verdict for transaction after {timeout}s") from e
        except ConnectionClosed as e:
            logger.error(f"Hydra connection closed while submitting: {e}")
            raise HydraConnectionError(f"Connection to Hydra node closed: {e}") from e

        tag = message.get("tag")
        if tag == "TxValid":
            valid_id = _verdict_tx_id(message) or tx_id
            logger.info(f"Transaction accepted by head: {valid_id}")
            return valid_id
        if tag == "TxInvalid":
            raise HydraSubmitError(f"Transaction rejected: {message.get('validationError', message)}")
        raise HydraSubmitError(f"Command failed: {message.get('clientInput', message)}")

    async def _wait_for_verdict(self, tx_id: str) -> Dict[str, Any]:
        while True:
            message = json.loads(await self._ws.recv())
            tag = message.get("tag")
            if tag not in VERDICT_TAGS:
                logger.debug(f"Skipping Hydra message: {tag}")
                continue
            if tx_id and tag != "CommandFailed" and _verdict_tx_id(message) not in ("", tx_id):
                logger.debug(f"Verdict for another transaction: {_verdict_tx_id(message)}")
                continue
            return message


def _verdict_tx_id(message: Dict[str, Any]) -> str:
    if message.get("transactionId"):
        return message["transactionId"]
    transaction = message.get("transaction")
    if isinstance(transaction, dict):
        return transaction.get("txId", "")
    return ""
