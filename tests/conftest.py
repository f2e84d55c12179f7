"""Shared fixtures for move-deployer tests"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
from aptos_sdk.account import Account

from move_deployer.models import DeployConfig, DeployMode, Network
from move_deployer.services.publish_invoker import PublishInvoker, PublishOutcome, PublishRequest

OBJ_1 = "0x" + "a1" * 32
OBJ_2 = "0x" + "b2" * 32
OBJ_3 = "0x" + "c3" * 32


def tx(version: int) -> Dict:
    """Minimal transaction summary as printed by the chain tool"""
    return {
        "transaction_hash": f"0x{version:064x}",
        "gas_used": 1000 + version,
        "gas_unit_price": 100,
        "success": True,
        "version": version,
        "vm_status": "Executed successfully",
    }


class FakePublisher(PublishInvoker):
    """Publisher returning scripted outcomes per address name

    A script entry is a PublishOutcome, an exception instance, or a list of
    those consumed one call at a time.
    """

    def __init__(self, script: Optional[Dict[str, Union[object, List[object]]]] = None):
        self.script = {k: list(v) if isinstance(v, list) else [v] for k, v in (script or {}).items()}
        self.requests: List[PublishRequest] = []
        self._version = 0

    async def invoke(self, request: PublishRequest) -> PublishOutcome:
        self.requests.append(request)
        steps = self.script.get(request.address_name)
        step = steps.pop(0) if steps else None

        if isinstance(step, BaseException):
            raise step
        if isinstance(step, PublishOutcome):
            return step

        self._version += 1
        return PublishOutcome(transactions=[tx(self._version)])

    @property
    def published(self) -> List[str]:
        return [r.address_name for r in self.requests]


@pytest.fixture
def private_key() -> str:
    return Account.generate().private_key.hex()


@pytest.fixture
def make_package(tmp_path):
    """Create a package directory with a Move.toml declaring addresses"""

    def _make(name: str, addresses: Dict[str, str]) -> Path:
        package_dir = tmp_path / "packages" / name
        package_dir.mkdir(parents=True)
        lines = [
            "[package]",
            f'name = "{name}"',
            'version = "1.0.0"',
            "",
            "[addresses]",
        ]
        lines.extend(f'{key} = "{value}"' for key, value in addresses.items())
        (package_dir / "Move.toml").write_text("\n".join(lines) + "\n")
        return package_dir

    return _make


@pytest.fixture
def two_packages(make_package):
    """lib has no dependencies, app depends on lib"""
    lib = make_package("lib", {"lib_addr": "_", "std": "0x1"})
    app = make_package("app", {"app_addr": "_", "lib_addr": "_", "std": "0x1"})
    return lib, app


@pytest.fixture
def make_config(tmp_path, two_packages):
    """Build a config for the two-package scenario"""

    def _make(**overrides) -> DeployConfig:
        lib, app = two_packages
        values = dict(
            package_paths=[lib, app],
            address_names=["lib_addr", "app_addr"],
            mode=DeployMode.OBJECT,
            network=Network.TESTNET,
            assume_yes=True,
            output_json=tmp_path / "deploy-report.json",
        )
        values.update(overrides)
        return DeployConfig(**values)

    return _make
