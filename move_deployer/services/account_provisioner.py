"""Sender account provisioning"""

import logging
from typing import Awaitable, Callable, Optional

from aptos_sdk.account import Account
from aptos_sdk.account_address import AccountAddress
from aptos_sdk.async_client import FaucetClient, RestClient

from ..api.exceptions import ProvisioningError
from ..constants import DEFAULT_FUND_AMOUNT, PROMPT_GENERATE_ACCOUNT
from ..models.account import ProvisionedAccount
from ..models.config import DeployConfig, Network, NetworkEndpoints

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
Funder = Callable[[NetworkEndpoints, str, int], Awaitable[None]]


def resolve_endpoints(config: DeployConfig) -> NetworkEndpoints:
    """
    Resolve network endpoints for a run

    Explicit overrides win over network defaults.

    Raises:
        ProvisioningError: If no REST endpoint is known for the network
    """
    rest_url = config.rest_url or config.network.rest_url
    if not rest_url:
        raise ProvisioningError(
            f"No REST url for network '{config.network.value}', pass --rest-url"
        )
    return NetworkEndpoints(
        rest_url=rest_url,
        faucet_url=config.faucet_url or config.network.faucet_url
    )


async def fund_with_faucet(endpoints: NetworkEndpoints, address: str, amount: int) -> None:
    """Fund an address through the faucet and wait for the transaction"""
    rest_client = RestClient(endpoints.rest_url)
    faucet_client = FaucetClient(endpoints.faucet_url, rest_client)
    try:
        await faucet_client.fund_account(AccountAddress.from_str_relaxed(address), amount)
    finally:
        # also closes the rest client
        await faucet_client.close()


class AccountProvisioner:
    """Establishes the sender identity of a run"""

    def __init__(self,
                 confirm: Optional[Confirm] = None,
                 funder: Optional[Funder] = None,
                 fund_amount: int = DEFAULT_FUND_AMOUNT):
        """
        Initialize provisioner

        Args:
            confirm: Asks the user a yes/no question
            funder: Faucet funding call, defaults to the aptos faucet client
            fund_amount: Octas requested for a generated account
        """
        self.confirm = confirm
        self.funder = funder or fund_with_faucet
        self.fund_amount = fund_amount

    async def provision(self,
                        config: DeployConfig,
                        endpoints: NetworkEndpoints) -> Optional[ProvisionedAccount]:
        """
        Decode the supplied key or generate and fund a new account

        Args:
            config: Run configuration
            endpoints: Resolved network endpoints

        Returns:
            The sender account, or None if the user declined to generate one

        Raises:
            ProvisioningError: If the key is invalid or funding fails
        """
        if config.private_key:
            return self.from_private_key(config.private_key)

        if not config.assume_yes:
            question = PROMPT_GENERATE_ACCOUNT.format(network=config.network.value)
            if self.confirm is None or not self.confirm(question):
                logger.info("Account generation declined, nothing to deploy")
                return None

        return await self.generate_funded(config.network, endpoints)

    def from_private_key(self, private_key: str) -> ProvisionedAccount:
        """Derive the sender from a supplied key, no network access"""
        try:
            account = Account.load_key(private_key.strip())
        except (ValueError, TypeError) as e:
            raise ProvisioningError(f"Invalid private key: {e}")

        return ProvisionedAccount(
            address=str(account.address()),
            private_key=account.private_key.hex(),
            public_key=str(account.public_key()),
        )

    async def generate_funded(self,
                              network: Network,
                              endpoints: NetworkEndpoints) -> ProvisionedAccount:
        """Generate a keypair and fund it from the faucet"""
        if not endpoints.faucet_url:
            raise ProvisioningError(
                f"No faucet url for network '{network.value}', pass --faucet-url "
                "or supply --private-key"
            )

        account = Account.generate()
        provisioned = ProvisionedAccount(
            address=str(account.address()),
            private_key=account.private_key.hex(),
            public_key=str(account.public_key()),
            generated=True,
        )

        logger.info("Funding generated account %s from %s", provisioned.address, endpoints.faucet_url)
        try:
            await self.funder(endpoints, provisioned.address, self.fund_amount)
        except ProvisioningError:
            raise
        except Exception as e:
            raise ProvisioningError(f"Failed to fund account {provisioned.address}: {e}") from e

        provisioned.funded_amount = self.fund_amount
        return provisioned
