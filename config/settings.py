"""
Configuration settings - defaults below, overridden by environment / .env
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Settings:
    """Application settings - configure values below or via environment"""

    # ===================
    # Ledger
    # ===================
    network: str = "Preview"
    signing_key: Optional[str] = None  # .skey file path or CBOR hex

    # ===================
    # Hydra node
    # ===================
    hydra_node_url: str = "http://localhost:4001"
    hydra_ws_url: Optional[str] = None  # derived from hydra_node_url when unset
    snapshot_timeout: float = 10.0
    submit_timeout: float = 30.0

    # ===================
    # Token
    # ===================
    policy_id: str = "your_policy_id"
    token_name: str = "your_token_name"
    hydra_address: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Load .env (if present) then read overrides from the environment."""
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            network=os.getenv("NETWORK") or defaults.network,
            signing_key=os.getenv("SIGNING_KEY") or defaults.signing_key,
            hydra_node_url=os.getenv("HYDRA_NODE_URL") or defaults.hydra_node_url,
            hydra_ws_url=os.getenv("HYDRA_WS_URL") or defaults.hydra_ws_url,
            snapshot_timeout=float(os.getenv("SNAPSHOT_TIMEOUT") or defaults.snapshot_timeout),
            submit_timeout=float(os.getenv("SUBMIT_TIMEOUT") or defaults.submit_timeout),
            policy_id=os.getenv("POLICY_ID") or defaults.policy_id,
            token_name=os.getenv("TOKEN_NAME") or defaults.token_name,
            hydra_address=os.getenv("HYDRA_ADDRESS") or defaults.hydra_address,
        )


# Global settings instance - import this
settings = Settings.from_env()
