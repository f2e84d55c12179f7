"""Data models for move-deployer"""

from .account import ProvisionedAccount
from .config import DeployConfig, DeployMode, Network, NetworkEndpoints, normalize_address
from .report import DeploymentReport, TransactionRecord
from .result import DeployResult, PackageState, RunStatus

__all__ = [
    # Config models
    "DeployConfig",
    "DeployMode",
    "Network",
    "NetworkEndpoints",
    "normalize_address",

    # Account
    "ProvisionedAccount",

    # Report models
    "DeploymentReport",
    "TransactionRecord",

    # Result models
    "DeployResult",
    "PackageState",
    "RunStatus",
]
