"""Asset identifiers shared by the snapshot and ledger layers."""

from dataclasses import dataclass

LOVELACE = "lovelace"
POLICY_ID_HEX_LENGTH = 56  # 28 bytes


@dataclass(frozen=True)
class Token:
    """Native token: hex policy id plus hex asset name."""
    policy_id: str
    name: str

    @property
    def unit(self) -> str:
        """Snapshot-style flattened key: policy id directly followed by name."""
        return f"{self.policy_id}{self.name}"

    @classmethod
    def from_unit(cls, unit: str) -> "Token":
        if len(unit) < POLICY_ID_HEX_LENGTH:
            raise ValueError(f"Asset unit too short for a policy id: {unit!r}")
        return cls(policy_id=unit[:POLICY_ID_HEX_LENGTH], name=unit[POLICY_ID_HEX_LENGTH:])

    def __str__(self) -> str:
        try:
            label = bytes.fromhex(self.name).decode("utf-8")
        except (ValueError, UnicodeDecodeError):
            label = self.name
        return f"{self.policy_id[:8]}..{label}"
