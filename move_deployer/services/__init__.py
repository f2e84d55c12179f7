"""Business logic services for move-deployer"""

from .account_provisioner import AccountProvisioner, resolve_endpoints, fund_with_faucet
from .credential_scope import CredentialScope
from .publish_invoker import (
    PublishInvoker,
    PublishRequest,
    PublishOutcome,
    AptosCliPublisher,
)
from .deploy_service import DeployService, DeploymentSequencer, RecordLog
from .config_service import ConfigService

__all__ = [
    "AccountProvisioner",
    "resolve_endpoints",
    "fund_with_faucet",
    "CredentialScope",
    "PublishInvoker",
    "PublishRequest",
    "PublishOutcome",
    "AptosCliPublisher",
    "DeployService",
    "DeploymentSequencer",
    "RecordLog",
    "ConfigService",
]
