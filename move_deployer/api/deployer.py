"""Deployer API for deployment runs"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ..constants import CREDENTIAL_STORE_FILE
from ..models import DeployConfig, DeployResult, ProvisionedAccount
from ..services.account_provisioner import Confirm, Funder
from ..services.config_service import ConfigService
from ..services.deploy_service import DeployService, PublisherFactory
from ..utils.async_utils import run_async


class Deployer:
    """Deployer class for deployment runs"""

    def __init__(self,
                 confirm: Optional[Confirm] = None,
                 funder: Optional[Funder] = None,
                 publisher_factory: Optional[PublisherFactory] = None,
                 on_account: Optional[Callable[[ProvisionedAccount], None]] = None,
                 credential_store: Union[str, Path] = CREDENTIAL_STORE_FILE):
        """
        Initialize deployer

        Args:
            confirm: Asks the user a yes/no question; without it every
                question is answered "no" unless the config assumes yes
            funder: Faucet funding call for generated accounts
            publisher_factory: Publish backend for a profile name
            on_account: Called with the sender account before deploying
            credential_store: Credential store the run profile is written to
        """
        self.service = DeployService(
            confirm=confirm,
            funder=funder,
            publisher_factory=publisher_factory,
            on_account=on_account,
            credential_store=credential_store,
        )

    def deploy(self, config: DeployConfig) -> DeployResult:
        """
        Deploy all configured packages

        Args:
            config: Run configuration

        Returns:
            DeployResult: Deployment result, failures included
        """
        return run_async(self.deploy_async(config))

    async def deploy_async(self, config: DeployConfig) -> DeployResult:
        """Async implementation of deploy"""
        return await self.service.run(config)


def deploy(config: Optional[DeployConfig] = None,
           config_path: Optional[Union[str, Path]] = None,
           resume_from: Optional[Union[str, Path]] = None,
           **options: Any) -> DeployResult:
    """
    Deploy packages

    This is a convenience function that builds the configuration and
    creates a Deployer instance to run it.

    Args:
        config: Ready configuration; built from the other arguments if omitted
        config_path: TOML configuration file
        resume_from: Report of a previous run to resume from
        **options: Configuration values overriding the file

    Returns:
        DeployResult: Deployment result
    """
    if config is None:
        overrides: Dict[str, Any] = dict(options)
        config = ConfigService(config_path).build(overrides, resume_from=resume_from)

    return Deployer().deploy(config)
