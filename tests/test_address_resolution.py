"""Tests for manifests, the address book and named address resolution"""

import pytest

from move_deployer.api.exceptions import ConfigInvariantError, DependencyOrderError, ManifestError
from move_deployer.core import AddressBook, AddressResolver, free_addresses, load_named_addresses
from move_deployer.models import DeployMode

from conftest import OBJ_1, OBJ_2, OBJ_3

SENDER = OBJ_3


class TestManifestLoader:

    def test_declared_addresses_in_order(self, make_package):
        path = make_package("app", {"app_addr": "_", "lib_addr": "_", "std": "0x1"})
        table = load_named_addresses(path)
        assert list(table.items()) == [("app_addr", "_"), ("lib_addr", "_"), ("std", "0x1")]
        assert free_addresses(table) == ["app_addr", "lib_addr"]

    def test_no_addresses_table(self, tmp_path):
        (tmp_path / "Move.toml").write_text('[package]\nname = "empty"\n')
        assert load_named_addresses(tmp_path) == {}

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            load_named_addresses(tmp_path)

    def test_malformed_manifest(self, tmp_path):
        (tmp_path / "Move.toml").write_text("[addresses\n")
        with pytest.raises(ManifestError, match="Invalid package manifest"):
            load_named_addresses(tmp_path)

    def test_manifest_error_is_config_error(self, tmp_path):
        with pytest.raises(ConfigInvariantError):
            load_named_addresses(tmp_path)


class TestAddressBook:

    def test_seed_is_normalized(self):
        book = AddressBook({"lib_addr": OBJ_1.upper().replace("0X", "0x")})
        assert book.get("lib_addr") == OBJ_1
        assert "lib_addr" in book
        assert len(book) == 1

    def test_bind_and_rebind_same_address(self):
        book = AddressBook()
        book.bind("lib_addr", OBJ_1)
        book.bind("lib_addr", OBJ_1)
        assert book.as_dict() == {"lib_addr": OBJ_1}

    def test_rebind_to_other_address_rejected(self):
        book = AddressBook({"lib_addr": OBJ_1})
        with pytest.raises(ConfigInvariantError, match="already bound"):
            book.bind("lib_addr", OBJ_2)
        assert book.get("lib_addr") == OBJ_1


class TestAddressResolver:

    def test_object_mode_skips_own_name(self):
        resolver = AddressResolver(DeployMode.OBJECT, SENDER)
        book = AddressBook({"lib_addr": OBJ_1})
        table = {"app_addr": "_", "lib_addr": "_", "std": "0x1"}

        assert resolver.resolve(table, book, "app_addr") == [("lib_addr", OBJ_1)]

    def test_account_mode_binds_own_name_to_sender(self):
        resolver = AddressResolver(DeployMode.ACCOUNT, SENDER)
        book = AddressBook({"lib_addr": OBJ_1})
        table = {"app_addr": "_", "lib_addr": "_"}

        assert resolver.resolve(table, book, "app_addr") == [
            ("app_addr", SENDER),
            ("lib_addr", OBJ_1),
        ]

    def test_concrete_addresses_are_left_alone(self):
        resolver = AddressResolver(DeployMode.OBJECT, SENDER)
        table = {"std": "0x1", "aptos_framework": "0x1"}
        assert resolver.resolve(table, AddressBook(), "app_addr") == []

    def test_missing_dependency(self):
        resolver = AddressResolver(DeployMode.OBJECT, SENDER)
        table = {"app_addr": "_", "lib_addr": "_"}

        with pytest.raises(DependencyOrderError) as exc_info:
            resolver.resolve(table, AddressBook(), "app_addr")

        assert exc_info.value.name == "lib_addr"
        assert exc_info.value.dependent == "app_addr"
        assert str(exc_info.value) == "lib_addr must be deployed before app_addr"
