"""Core functionality for move-deployer"""

from .address_book import AddressBook
from .address_resolver import AddressResolver, free_addresses
from .manifest_loader import load_named_addresses
from .report_writer import write_report, load_report

__all__ = [
    "AddressBook",
    "AddressResolver",
    "free_addresses",
    "load_named_addresses",
    "write_report",
    "load_report",
]
