"""Configuration data models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any

from aptos_sdk.account_address import AccountAddress

from ..api.exceptions import ConfigInvariantError
from .report import TransactionRecord
from ..constants import (
    ARTIFACTS_ALL,
    ARTIFACTS_NONE,
    CHUNKED_PUBLISH_POLICY,
    DEFAULT_DEPLOY_MODE,
    DEFAULT_NETWORK,
    DEFAULT_OUTPUT_JSON,
    NETWORK_FAUCET_URLS,
    NETWORK_REST_URLS,
)


class Network(Enum):
    """Target network for a deployment run"""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"
    LOCAL = "local"

    @property
    def rest_url(self) -> Optional[str]:
        """Default REST endpoint, None when it must be supplied"""
        return NETWORK_REST_URLS[self.value]

    @property
    def faucet_url(self) -> Optional[str]:
        """Default faucet endpoint, None when the network has none"""
        return NETWORK_FAUCET_URLS[self.value]

    @property
    def supports_chunked_publish(self) -> bool:
        return CHUNKED_PUBLISH_POLICY[self.value]

    @property
    def profile_network(self) -> str:
        """Network name as written in the credential store"""
        return self.value.capitalize()


class DeployMode(Enum):
    """How a package is owned on chain"""
    ACCOUNT = "account"
    OBJECT = "object"


def normalize_address(value: Any) -> str:
    """Parse and normalize an on-chain address

    Raises:
        ValueError: If the value is not a valid address
    """
    if isinstance(value, AccountAddress):
        return str(value)
    try:
        return str(AccountAddress.from_str_relaxed(str(value).strip()))
    except RuntimeError as e:
        # the sdk reports length problems as RuntimeError
        raise ValueError(str(e)) from e


@dataclass
class NetworkEndpoints:
    """Resolved endpoints for one run"""

    rest_url: str
    faucet_url: Optional[str] = None


@dataclass
class DeployConfig:
    """Deployment run configuration"""

    package_paths: List[Path] = field(default_factory=list)
    address_names: List[str] = field(default_factory=list)
    mode: DeployMode = DeployMode(DEFAULT_DEPLOY_MODE)
    network: Network = Network(DEFAULT_NETWORK)
    private_key: Optional[str] = None
    assume_yes: bool = False
    output_json: Path = Path(DEFAULT_OUTPUT_JSON)
    deployed_addresses: Dict[str, str] = field(default_factory=dict)
    rest_url: Optional[str] = None
    faucet_url: Optional[str] = None
    publish_code: bool = False
    resumed_records: List[TransactionRecord] = field(default_factory=list)

    @property
    def included_artifacts(self) -> str:
        """Artifact policy handed to the publish call"""
        return ARTIFACTS_ALL if self.publish_code else ARTIFACTS_NONE

    @property
    def packages(self) -> List[tuple]:
        """Ordered (package_path, address_name) pairs"""
        return list(zip(self.package_paths, self.address_names))

    def validate(self) -> None:
        """Check run invariants before any network activity

        Raises:
            ConfigInvariantError: If the configuration cannot be deployed
        """
        if not self.package_paths:
            raise ConfigInvariantError("Missing argument 'package-paths'")
        if not self.address_names:
            raise ConfigInvariantError("Missing argument 'address-names'")

        if len(self.package_paths) != len(self.address_names):
            raise ConfigInvariantError(
                "Package paths and address names must have the same length "
                f"({len(self.package_paths)} != {len(self.address_names)})"
            )

        seen = set()
        for name in self.address_names:
            if not name or not name.strip():
                raise ConfigInvariantError("Address names must not be empty")
            if name in seen:
                raise ConfigInvariantError(f"Duplicate address name: {name}")
            seen.add(name)

        for name, address in self.deployed_addresses.items():
            try:
                normalize_address(address)
            except ValueError as e:
                raise ConfigInvariantError(
                    f"Invalid deployed address for '{name}': {address} ({e})"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (private key excluded)"""
        return {
            "package_paths": [str(p) for p in self.package_paths],
            "address_names": list(self.address_names),
            "mode": self.mode.value,
            "network": self.network.value,
            "assume_yes": self.assume_yes,
            "output_json": str(self.output_json),
            "deployed_addresses": dict(self.deployed_addresses),
            "rest_url": self.rest_url,
            "faucet_url": self.faucet_url,
            "publish_code": self.publish_code,
            "resumed_records": [r.to_dict() for r in self.resumed_records],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeployConfig':
        """Create from dictionary

        Accepts the short key names used by older config files
        (``modules_path``, ``addresses_name``, ``module_type``, ``yes``).
        """
        package_paths = data.get("package_paths", data.get("modules_path")) or []
        address_names = data.get("address_names", data.get("addresses_name")) or []
        mode = data.get("mode", data.get("module_type")) or DEFAULT_DEPLOY_MODE
        assume_yes = data.get("assume_yes", data.get("yes", False))

        try:
            mode = mode if isinstance(mode, DeployMode) else DeployMode(str(mode).lower())
        except ValueError:
            raise ConfigInvariantError(f"Invalid deploy mode: {mode}")

        network = data.get("network") or DEFAULT_NETWORK
        try:
            network = network if isinstance(network, Network) else Network(str(network).lower())
        except ValueError:
            raise ConfigInvariantError(f"Invalid network: {network}")

        return cls(
            package_paths=[Path(p) for p in package_paths],
            address_names=[str(n) for n in address_names],
            mode=mode,
            network=network,
            private_key=data.get("private_key"),
            assume_yes=bool(assume_yes),
            output_json=Path(data.get("output_json") or DEFAULT_OUTPUT_JSON),
            deployed_addresses=dict(data.get("deployed_addresses") or {}),
            rest_url=data.get("rest_url"),
            faucet_url=data.get("faucet_url"),
            publish_code=bool(data.get("publish_code", False)),
            resumed_records=[
                r if isinstance(r, TransactionRecord) else TransactionRecord.from_dict(r)
                for r in data.get("resumed_records") or []
            ],
        )
