"""Vault map and minter registry"""
from dataclasses import asdict, replace
from typing import Any, Dict, List, Set

from .vault import Vault


class VaultStore:
    """Owns every vault, keyed by minter, plus the append-only list of minters.

    Lookups never fail: an account that never minted reads as an empty
    vault. Vaults are zeroed when closed, never removed, and the registry
    only ever grows, in first-mint order.
    """

    def __init__(self):
        self._vaults: Dict[str, Vault] = {}
        self._minters: List[str] = []
        self._known: Set[str] = set()

    def get(self, account: str) -> Vault:
        """Copy of the account's vault"""
        vault = self._vaults.get(account)
        if vault is None:
            return Vault()
        return replace(vault)

    def put(self, account: str, vault: Vault) -> None:
        self._vaults[account] = replace(vault)

    def clear(self, account: str, timestamp: int) -> None:
        """Zero the vault after a liquidation"""
        self._vaults[account] = Vault(last_instalment=timestamp)

    def register_minter(self, account: str) -> bool:
        """Append the account on its first mint, returns True if it was new"""
        if account in self._known:
            return False
        self._minters.append(account)
        self._known.add(account)
        return True

    def minter_at(self, index: int) -> str:
        if index < 0:
            raise IndexError("minter index out of range")
        return self._minters[index]

    def minter_count(self) -> int:
        return len(self._minters)

    def minters(self) -> List[str]:
        return list(self._minters)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable image of the store for a persistence layer"""
        return {
            "vaults": {account: asdict(vault) for account, vault in self._vaults.items()},
            "minters": list(self._minters),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VaultStore":
        store = cls()
        store.restore(data)
        return store

    def snapshot(self) -> Dict[str, Any]:
        return self.to_dict()

    def restore(self, data: Dict[str, Any]) -> None:
        self._vaults = {account: Vault(**fields) for account, fields in data["vaults"].items()}
        self._minters = list(data["minters"])
        self._known = set(self._minters)
