"""Tests for run configuration and config file loading"""

import json
from pathlib import Path

import pytest

from move_deployer.api.exceptions import ConfigInvariantError
from move_deployer.constants import ENV_PRIVATE_KEY
from move_deployer.models import DeployConfig, DeployMode, Network
from move_deployer.services.config_service import ConfigService, parse_address_map

from conftest import OBJ_1, OBJ_2


class TestValidate:

    def test_length_mismatch_rejected(self):
        config = DeployConfig(package_paths=[Path("a"), Path("b")], address_names=["a_addr"])
        with pytest.raises(ConfigInvariantError, match="same length"):
            config.validate()

    def test_duplicate_address_names_rejected(self):
        config = DeployConfig(package_paths=[Path("a"), Path("b")], address_names=["x", "x"])
        with pytest.raises(ConfigInvariantError, match="Duplicate address name: x"):
            config.validate()

    def test_missing_packages_rejected(self):
        with pytest.raises(ConfigInvariantError, match="package-paths"):
            DeployConfig(address_names=["x"]).validate()

    def test_invalid_deployed_address_rejected(self):
        config = DeployConfig(
            package_paths=[Path("a")],
            address_names=["a_addr"],
            deployed_addresses={"dep": "not-an-address"},
        )
        with pytest.raises(ConfigInvariantError, match="dep"):
            config.validate()

    def test_valid_config_passes(self):
        DeployConfig(
            package_paths=[Path("a"), Path("b")],
            address_names=["a_addr", "b_addr"],
            deployed_addresses={"dep": OBJ_1},
        ).validate()


class TestFromDict:

    def test_defaults(self):
        config = DeployConfig.from_dict({})
        assert config.mode == DeployMode.OBJECT
        assert config.network == Network.DEVNET
        assert config.assume_yes is False
        assert config.output_json == Path("deploy-report.json")
        assert config.included_artifacts == "none"

    def test_legacy_key_names(self):
        config = DeployConfig.from_dict({
            "modules_path": ["libs", "app"],
            "addresses_name": ["lib_addr", "app_addr"],
            "module_type": "Account",
            "yes": True,
        })
        assert config.package_paths == [Path("libs"), Path("app")]
        assert config.address_names == ["lib_addr", "app_addr"]
        assert config.mode == DeployMode.ACCOUNT
        assert config.assume_yes is True

    def test_invalid_network(self):
        with pytest.raises(ConfigInvariantError, match="Invalid network"):
            DeployConfig.from_dict({"network": "moonnet"})

    def test_publish_code_includes_all_artifacts(self):
        assert DeployConfig.from_dict({"publish_code": True}).included_artifacts == "all"


class TestNetworkPolicy:

    @pytest.mark.parametrize("network,supported", [
        (Network.MAINNET, True),
        (Network.TESTNET, True),
        (Network.DEVNET, False),
        (Network.LOCAL, False),
    ])
    def test_chunked_publish_policy(self, network, supported):
        assert network.supports_chunked_publish is supported

    def test_local_has_no_default_endpoints(self):
        assert Network.LOCAL.rest_url is None
        assert Network.LOCAL.faucet_url is None

    def test_mainnet_has_no_faucet(self):
        assert Network.MAINNET.rest_url.startswith("https://")
        assert Network.MAINNET.faucet_url is None


class TestParseAddressMap:

    def test_pairs(self):
        assert parse_address_map(f"a={OBJ_1}, b={OBJ_2}") == {"a": OBJ_1, "b": OBJ_2}

    def test_empty(self):
        assert parse_address_map("") == {}

    def test_malformed(self):
        with pytest.raises(ConfigInvariantError):
            parse_address_map("a0x1")


class TestConfigService:

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / "deploy.toml"
        path.write_text(
            'module_type = "object"\n'
            'modules_path = ["libs", "app"]\n'
            'addresses_name = ["lib_addr", "app_addr"]\n'
            'network = "testnet"\n'
            'yes = false\n'
            'output_json = "out/report.json"\n'
            '\n'
            '[deployed_addresses]\n'
            f'std_ext = "{OBJ_1}"\n'
        )
        return path

    def test_file_values(self, config_file, monkeypatch):
        monkeypatch.delenv(ENV_PRIVATE_KEY, raising=False)
        config = ConfigService(config_file).build()

        assert config.network == Network.TESTNET
        assert config.address_names == ["lib_addr", "app_addr"]
        assert config.output_json == Path("out/report.json")
        assert config.deployed_addresses == {"std_ext": OBJ_1}
        assert config.private_key is None

    def test_overrides_win_and_none_is_ignored(self, config_file):
        config = ConfigService(config_file).build({
            "network": "mainnet",
            "assume_yes": True,
            "rest_url": None,
        })
        assert config.network == Network.MAINNET
        assert config.assume_yes is True
        assert config.rest_url is None
        assert config.package_paths == [Path("libs"), Path("app")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigInvariantError, match="not found"):
            ConfigService(tmp_path / "nope.toml").build()

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("network = ")
        with pytest.raises(ConfigInvariantError, match="Invalid configuration file"):
            ConfigService(path).build()

    def test_private_key_from_environment(self, monkeypatch):
        monkeypatch.setenv(ENV_PRIVATE_KEY, "0xabc")
        assert ConfigService().build().private_key == "0xabc"

    def test_resume_from_report(self, config_file, tmp_path):
        report = tmp_path / "previous.json"
        report.write_text(json.dumps({
            "account": OBJ_2,
            "network": "testnet",
            "info": [{
                "module_path": "libs",
                "address_name": "lib_addr",
                "deployed_at": OBJ_2,
                "tx_info": [],
            }],
        }))

        config = ConfigService(config_file).build(
            {"deployed_addresses": {"std_ext": OBJ_2}},
            resume_from=report,
        )
        assert config.deployed_addresses == {"lib_addr": OBJ_2, "std_ext": OBJ_2}
        assert [r.address_name for r in config.resumed_records] == ["lib_addr"]
        assert config.resumed_records[0].package_path == Path("libs")

    def test_resume_from_malformed_report(self, tmp_path):
        report = tmp_path / "previous.json"
        report.write_text("{}")
        with pytest.raises(ConfigInvariantError, match="Cannot resume"):
            ConfigService().build(resume_from=report)

    def test_resume_from_non_object_report(self, tmp_path):
        report = tmp_path / "previous.json"
        report.write_text("[]")
        with pytest.raises(ConfigInvariantError, match="Cannot resume"):
            ConfigService().build(resume_from=report)
