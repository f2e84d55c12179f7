"""Resolved address bookkeeping for a deployment run"""

import logging
from typing import Dict, Iterator, Optional, Tuple

from ..api.exceptions import ConfigInvariantError
from ..models.config import normalize_address

logger = logging.getLogger(__name__)


class AddressBook:
    """Growing mapping from address name to deployed address

    Seeded from already-deployed entries; each deployed package adds one.
    """

    def __init__(self, seed: Optional[Dict[str, str]] = None):
        self._addresses: Dict[str, str] = {}
        for name, address in (seed or {}).items():
            self._addresses[name] = normalize_address(address)

    def __contains__(self, name: str) -> bool:
        return name in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._addresses.items())

    def get(self, name: str) -> Optional[str]:
        return self._addresses.get(name)

    def bind(self, name: str, address: str) -> None:
        """Record the address a name was deployed at

        Raises:
            ConfigInvariantError: If the name is already bound elsewhere
        """
        address = normalize_address(address)
        existing = self._addresses.get(name)
        if existing is not None and existing != address:
            raise ConfigInvariantError(
                f"Address name '{name}' is already bound to {existing}, "
                f"cannot rebind to {address}"
            )
        self._addresses[name] = address
        logger.debug("Bound %s -> %s", name, address)

    def as_dict(self) -> Dict[str, str]:
        """Snapshot copy of the current bindings"""
        return dict(self._addresses)
