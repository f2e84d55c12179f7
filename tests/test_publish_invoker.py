"""Tests for the aptos CLI publish backend"""

import json
import subprocess
from pathlib import Path

import pytest

from move_deployer.api.exceptions import PackageSizeExceededError, PublishError, ToolNotFoundError
from move_deployer.models import DeployMode
from move_deployer.services.publish_invoker import AptosCliPublisher, PublishRequest
from move_deployer.utils import process_utils
from move_deployer.utils.process_utils import CommandResult, run_command

from conftest import OBJ_1, OBJ_2, tx


@pytest.fixture
def publisher():
    return AptosCliPublisher("move-deployer-test", executable="aptos")


def request(mode=DeployMode.OBJECT, **kwargs):
    values = dict(
        package_path=Path("packages/app"),
        mode=mode,
        address_name="app_addr",
    )
    values.update(kwargs)
    return PublishRequest(**values)


def finished(stdout="", stderr="", returncode=0):
    return CommandResult(args=["aptos"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestBuildArgs:

    def test_object_mode(self, publisher):
        args = publisher.build_args(request(
            substitutions=[("lib_addr", OBJ_1), ("util_addr", OBJ_2)],
            assume_yes=True,
        ))
        assert args == [
            "aptos", "move", "deploy-object",
            "--address-name", "app_addr",
            "--package-dir", "packages/app",
            "--profile", "move-deployer-test",
            "--included-artifacts", "none",
            "--skip-fetch-latest-git-deps",
            "--named-addresses", f"lib_addr={OBJ_1},util_addr={OBJ_2}",
            "--assume-yes",
        ]

    def test_account_mode_chunked(self, publisher):
        args = publisher.build_args(request(
            mode=DeployMode.ACCOUNT,
            included_artifacts="all",
            chunked=True,
        ))
        assert args[:3] == ["aptos", "move", "publish"]
        assert "--address-name" not in args
        assert "--named-addresses" not in args
        assert "--assume-yes" not in args
        assert args[args.index("--included-artifacts") + 1] == "all"
        assert args[-1] == "--chunked-publish"


class TestParseResult:

    def test_object_deployment(self, publisher):
        stdout = (
            "Compiling, may take a little while to download git dependencies...\n"
            f"Code was successfully deployed to object address {OBJ_1}\n"
            + json.dumps({"Result": tx(7)}, indent=2)
        )
        outcome = publisher.parse_result(request(), finished(stdout))

        assert outcome.object_address == OBJ_1
        assert outcome.transactions == [tx(7)]

    def test_chunked_result_list(self, publisher):
        stdout = json.dumps({"Result": [tx(1), tx(2), tx(3)]})
        outcome = publisher.parse_result(request(mode=DeployMode.ACCOUNT), finished(stdout))

        assert outcome.object_address is None
        assert [t["version"] for t in outcome.transactions] == [1, 2, 3]

    def test_object_address_missing(self, publisher):
        stdout = json.dumps({"Result": tx(1)})
        with pytest.raises(PublishError, match="no object address"):
            publisher.parse_result(request(), finished(stdout))

    def test_package_too_large(self, publisher):
        stdout = json.dumps({
            "Error": "Unexpected error: The package is larger than 60000 bytes (71234 bytes)!"
        })
        with pytest.raises(PackageSizeExceededError) as exc_info:
            publisher.parse_result(request(), finished(stdout, returncode=1))
        assert exc_info.value.package_path == "packages/app"

    def test_tool_error(self, publisher):
        stdout = json.dumps({"Error": "Simulation failed with status: OUT_OF_GAS"})
        with pytest.raises(PublishError, match="OUT_OF_GAS") as exc_info:
            publisher.parse_result(request(), finished(stdout, returncode=1))
        assert not isinstance(exc_info.value, PackageSizeExceededError)

    def test_failure_without_json(self, publisher):
        with pytest.raises(PublishError, match="unable to resolve dependency"):
            publisher.parse_result(
                request(),
                finished(stderr="error: unable to resolve dependency\n", returncode=2),
            )

    def test_success_without_json(self, publisher):
        with pytest.raises(PublishError, match="no result"):
            publisher.parse_result(request(), finished("done\n"))


class TestRunCommand:

    def test_chain_tool_gets_no_stdin(self, monkeypatch):
        calls = []

        def fake_run(args, **kwargs):
            calls.append(kwargs)
            return subprocess.CompletedProcess(args, 0, stdout="{}", stderr="warning\n")

        monkeypatch.setattr(process_utils.subprocess, "run", fake_run)

        result = run_command(["aptos", "move", "publish"])

        assert result.ok
        assert result.stdout == "{}"
        # a prompt on a captured stream would block forever
        assert calls[0]["stdin"] is subprocess.DEVNULL
        assert calls[0]["capture_output"] is True

    def test_missing_executable(self, monkeypatch):
        def fake_run(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(process_utils.subprocess, "run", fake_run)

        with pytest.raises(ToolNotFoundError):
            run_command(["aptos", "move", "publish"])
