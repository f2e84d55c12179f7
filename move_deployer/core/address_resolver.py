"""Named address substitution for package publishing"""

from typing import Dict, List, Optional, Tuple

from .address_book import AddressBook
from ..api.exceptions import DependencyOrderError
from ..constants import UNBOUND_ADDRESS_PLACEHOLDER
from ..models.config import DeployMode


def free_addresses(address_table: Dict[str, str]) -> List[str]:
    """Names a package leaves unbound in its manifest"""
    return [name for name, placeholder in address_table.items()
            if placeholder == UNBOUND_ADDRESS_PLACEHOLDER]


class AddressResolver:
    """Builds the named-address substitutions for one publish call"""

    def __init__(self, mode: DeployMode, sender_address: Optional[str] = None):
        """
        Initialize resolver

        Args:
            mode: Deployment mode of the run
            sender_address: Sender address, binds the package's own name
                in account mode
        """
        self.mode = mode
        self.sender_address = sender_address

    def resolve(self,
                address_table: Dict[str, str],
                address_book: AddressBook,
                self_name: str) -> List[Tuple[str, str]]:
        """
        Resolve every free address of a package

        Args:
            address_table: Package's declared addresses (name -> placeholder)
            address_book: Addresses resolved so far
            self_name: The package's own address name

        Returns:
            Ordered (name, address) substitutions

        Raises:
            DependencyOrderError: If a dependency has not been deployed yet
        """
        substitutions = []

        for name in free_addresses(address_table):
            if name == self_name:
                if self.mode == DeployMode.OBJECT:
                    # bound by the object this publish creates
                    continue
                if self.sender_address is not None:
                    substitutions.append((name, self.sender_address))
                    continue

            address = address_book.get(name)
            if address is None:
                raise DependencyOrderError(name, self_name)
            substitutions.append((name, address))

        return substitutions
