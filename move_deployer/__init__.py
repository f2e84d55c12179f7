"""Move Deployer - ordered deployment of interdependent Move packages.

Deploys a list of packages to one Aptos network, binding each package's
named address to where it was deployed so later packages can depend on it,
and writes a report that can seed a later run.
"""

from .__version__ import __version__, __version_info__, __author__, __email__, __license__

# Core API
from .api.deployer import Deployer, deploy

# Data models
from .models import (
    DeployConfig,
    DeployMode,
    Network,
    DeployResult,
    DeploymentReport,
    TransactionRecord,
    PackageState,
    RunStatus,
)

# Exceptions
from .api.exceptions import (
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

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__author__",
    "__email__",
    "__license__",

    # Main classes
    "Deployer",
    "deploy",

    # Data models
    "DeployConfig",
    "DeployMode",
    "Network",
    "DeployResult",
    "DeploymentReport",
    "TransactionRecord",
    "PackageState",
    "RunStatus",

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
