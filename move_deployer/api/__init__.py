# move_deployer/api/__init__.py
"""API layer for move-deployer"""

from .exceptions import (
    DeployerError,
    ConfigInvariantError,
    ManifestError,
    DependencyOrderError,
    PublishError,
    PackageSizeExceededError,
    PublishDeclinedError,
    ProvisioningError,
    CredentialStoreError,
    ReportWriteError,
    ToolNotFoundError,
    DeployError,
)
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Deployer",

    # Convenience functions
    "deploy",

    # Exceptions
    "DeployerError",
    "ConfigInvariantError",
    "ManifestError",
    "DependencyOrderError",
    "PublishError",
    "PackageSizeExceededError",
    "PublishDeclinedError",
    "ProvisioningError",
    "CredentialStoreError",
    "ReportWriteError",
    "ToolNotFoundError",
    "DeployError",
]
