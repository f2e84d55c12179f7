"""Utility functions for move-deployer"""

from .async_utils import run_async, sync_to_async
from .process_utils import (
    CommandResult,
    aptos_bin,
    check_aptos_installed,
    get_aptos_version,
    run_command,
    run_command_async,
)

__all__ = [
    "run_async",
    "sync_to_async",
    "CommandResult",
    "aptos_bin",
    "check_aptos_installed",
    "get_aptos_version",
    "run_command",
    "run_command_async",
]
