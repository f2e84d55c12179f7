"""Transient credential profile for the chain tool"""

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..api.exceptions import CredentialStoreError
from ..constants import CREDENTIAL_STORE_FILE, PROFILE_NAME_PREFIX
from ..models.account import ProvisionedAccount
from ..models.config import Network, NetworkEndpoints
from ..utils.async_utils import sync_to_async

logger = logging.getLogger(__name__)


def new_profile_name() -> str:
    """Profile name unique to one run"""
    return f"{PROFILE_NAME_PREFIX}-{uuid.uuid4().hex[:8]}"


class CredentialScope:
    """Named profile that exists only for the duration of a run

    Use as an async context manager; the profile is removed on every exit
    path and other profiles in the same store are left untouched.
    """

    def __init__(self,
                 account: ProvisionedAccount,
                 network: Network,
                 endpoints: NetworkEndpoints,
                 store_path: Union[str, Path] = CREDENTIAL_STORE_FILE,
                 profile_name: Optional[str] = None,
                 custom_endpoint: bool = False):
        """
        Initialize credential scope

        Args:
            account: Sender account the profile signs with
            network: Target network
            endpoints: Resolved endpoints written into the profile
            store_path: Credential store file
            profile_name: Profile name, generated when omitted
            custom_endpoint: REST url overrides the network default
        """
        self.account = account
        self.network = network
        self.endpoints = endpoints
        self.store_path = Path(store_path)
        self.profile_name = profile_name or new_profile_name()
        self.custom_endpoint = custom_endpoint
        self._acquired = False

    def profile_entry(self) -> Dict[str, Any]:
        """Profile as stored by the chain tool"""
        network = self.network.profile_network
        if self.custom_endpoint and self.network != Network.LOCAL:
            network = "Custom"

        entry = {
            "network": network,
            "private_key": self.account.private_key,
            "public_key": self.account.public_key,
            "account": self.account.address[2:] if self.account.address.startswith("0x")
            else self.account.address,
            "rest_url": self.endpoints.rest_url,
        }
        if self.endpoints.faucet_url:
            entry["faucet_url"] = self.endpoints.faucet_url
        return entry

    def acquire(self) -> str:
        """
        Add the profile to the store

        Returns:
            Profile name

        Raises:
            CredentialStoreError: If the store cannot be read or written
        """
        data = self._load()
        profiles = data.setdefault("profiles", {})
        profiles[self.profile_name] = self.profile_entry()
        self._save(data)
        self._acquired = True

        logger.debug("Created profile %s in %s", self.profile_name, self.store_path)
        return self.profile_name

    def release(self) -> None:
        """
        Remove the profile, deleting the store if nothing else is in it

        Raises:
            CredentialStoreError: If the store cannot be rewritten
        """
        if not self._acquired:
            return

        if not self.store_path.exists():
            logger.warning("Credential store %s disappeared during the run", self.store_path)
            self._acquired = False
            return

        data = self._load()
        profiles = data.get("profiles") or {}
        profiles.pop(self.profile_name, None)

        others = {k: v for k, v in data.items() if k != "profiles"}
        try:
            if not profiles and not others:
                self.store_path.unlink()
                logger.debug("Removed credential store %s", self.store_path)
            else:
                data["profiles"] = profiles
                self._save(data)
                logger.debug("Removed profile %s from %s", self.profile_name, self.store_path)
        except OSError as e:
            raise CredentialStoreError(f"Failed to update {self.store_path}: {e}")

        self._acquired = False

    async def __aenter__(self) -> str:
        return await sync_to_async(self.acquire)()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            await sync_to_async(self.release)()
        except CredentialStoreError as e:
            if exc_val is None:
                raise
            logger.error("Failed to remove profile %s: %s", self.profile_name, e)
        return False

    def _load(self) -> Dict[str, Any]:
        if not self.store_path.exists():
            return {}
        try:
            with open(self.store_path, 'r') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise CredentialStoreError(f"Failed to read {self.store_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CredentialStoreError(f"Unexpected content in {self.store_path}")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.store_path, 'w') as f:
                f.write("---\n")
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise CredentialStoreError(f"Failed to write {self.store_path}: {e}")
