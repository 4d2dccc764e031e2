#!/usr/bin/env python3
"""
Hydra CIP-68 Metadata Updater

Finds the UTxO holding the configured token in an open Hydra head and
rewrites its CIP-68 metadata datum.

Usage:
    python main.py            # build, sign and submit
    python main.py --dry-run  # build and sign only
"""

import argparse
import asyncio
import logging
import sys

from config import settings
from hydra_metadata.hydra import HydraClient, MatchCriteria
from hydra_metadata.ledger import LedgerSession, update_metadata

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Example metadata, deliberately mixing every supported shape
EXAMPLE_METADATA = {
    "name": "Example Token",
    "description": "A test token",
    "image": "ipfs://abc123",
    "nsfw": True,
    "copyright": False,
    "noFloats": 3.14,
    "files": [
        {"src": "ipfs://abc246", "mediaType": "image/jpeg"},
    ],
    "attributes": {
        "strength": 9,
        "perception": 12,
        "endurance": 8,
        "charisma": 7,
        "intelligence": 19,
        "agility": 3,
        "luck": 1,
    },
    "scientific": 3e10 - 1,
    "scientificToo": 3e-5,
    "bigInteger": 5000000,
}


async def run(dry_run: bool = False) -> bool:
    """
    1. Initialize the ledger session
    2. Query the head's UTxOs
    3. Build + sign the metadata update
    4. Submit it to the head
    """
    print("=" * 60)
    print("Hydra CIP-68 Metadata Updater")
    print("=" * 60)
    print()
    print(f"Hydra node: {settings.hydra_node_url}")
    print(f"Network:    {settings.network}")
    print()

    if not settings.signing_key:
        print("❌ SIGNING_KEY is not set")
        return False

    print("[1/4] Initializing ledger session...")
    session = LedgerSession(settings.network)
    session.select_wallet(settings.signing_key)
    print(f"✅ Wallet: {session.wallet_address}")

    print()
    print("[2/4] Querying Hydra UTxOs...")
    client = HydraClient(settings.hydra_node_url, ws_url=settings.hydra_ws_url, timeout=settings.snapshot_timeout)
    criteria = MatchCriteria(
        address=settings.hydra_address,
        policy_id=settings.policy_id,
        token_name=settings.token_name,
    )
    utxo = client.get_usable_utxo(criteria)
    if utxo is None:
        print("❌ No usable UTxO found.")
        return False
    print(f"✅ Found UTxO: {utxo.utxo_id}")

    print()
    print("[3/4] Building metadata update...")
    tx = update_metadata(session, settings.policy_id, settings.token_name, EXAMPLE_METADATA, utxo)
    tx_cbor = tx.to_cbor_hex()
    print(f"✅ Signed transaction {tx.id}")
    logger.info(f"Signed Tx {tx_cbor}")

    if dry_run:
        print()
        print("[4/4] Dry run - not submitting")
        return True

    print()
    print("[4/4] Submitting to head...")
    async with client:
        tx_id = await client.submit_transaction(tx_cbor, tx_id=str(tx.id), timeout=settings.submit_timeout)
    print(f"✅ Updated metadata: {tx_id}")
    return True


async def main():
    """Main entry point"""
    parser = argparse.ArgumentParser()
    parser.add_argument("--dry-run", action="store_true", help="Build and sign without submitting")
    args = parser.parse_args()

    try:
        success = await run(dry_run=args.dry_run)
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception:
        logger.exception("Error during metadata update")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
