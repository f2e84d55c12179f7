"""System diagnostic command"""

import sys
from pathlib import Path

import click
import yaml
from rich import box
from rich.table import Table

from ..utils.output import console
from ...api.exceptions import DeployerError
from ...constants import CREDENTIAL_STORE_FILE, PROFILE_NAME_PREFIX
from ...services.config_service import ConfigService
from ...utils.process_utils import check_aptos_installed, get_aptos_version


class DiagnosticCheck:
    """Base class for diagnostic checks"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.passed = False
        self.message = ""

    def run(self) -> 'DiagnosticCheck':
        """Run the diagnostic check"""
        raise NotImplementedError


class AptosCliCheck(DiagnosticCheck):
    """Check the aptos CLI is installed"""

    def __init__(self):
        super().__init__("Aptos CLI", "The publish tool can be executed")

    def run(self):
        try:
            path = check_aptos_installed()
        except DeployerError as e:
            self.passed = False
            self.message = str(e)
            return self

        self.passed = True
        self.message = get_aptos_version() or path
        return self


class ConfigFileCheck(DiagnosticCheck):
    """Check a configuration file builds a valid run"""

    def __init__(self, config_path: Path):
        super().__init__("Configuration", f"{config_path} is a valid run configuration")
        self.config_path = config_path

    def run(self):
        try:
            config = ConfigService(self.config_path).build()
            config.validate()
        except DeployerError as e:
            self.passed = False
            self.message = str(e)
            return self

        self.passed = True
        self.message = f"{len(config.packages)} package(s) for {config.network.value}"
        return self


class LeftoverProfileCheck(DiagnosticCheck):
    """Check no transient profile was left behind by an interrupted run"""

    def __init__(self, store_path: Path = Path(CREDENTIAL_STORE_FILE)):
        super().__init__("Credential Store", "No leftover transient profiles")
        self.store_path = store_path

    def run(self):
        if not self.store_path.exists():
            self.passed = True
            self.message = "No credential store in this directory"
            return self

        try:
            with open(self.store_path, 'r') as f:
                data = yaml.safe_load(f) or {}
            profiles = data.get("profiles") or {}
        except (OSError, yaml.YAMLError, AttributeError) as e:
            self.passed = False
            self.message = f"Cannot read {self.store_path}: {e}"
            return self

        leftovers = [name for name in profiles if str(name).startswith(f"{PROFILE_NAME_PREFIX}-")]
        self.passed = not leftovers
        self.message = (
            "No leftover profiles" if self.passed
            else f"Leftover profile(s) in {self.store_path}: {', '.join(leftovers)}"
        )
        return self


@click.command()
@click.option('--config-path', type=click.Path(exists=True, dir_okay=False),
              help='Configuration file to validate')
def doctor(config_path):
    """Check the environment is ready to deploy

    Examples:

        # Check the aptos CLI and leftover profiles
        move-deployer doctor

        # Also validate a configuration file
        move-deployer doctor --config-path deploy.toml
    """
    console.print("[bold]Move Deployer Diagnostics[/bold]\n")

    checks = [AptosCliCheck(), LeftoverProfileCheck()]
    if config_path:
        checks.append(ConfigFileCheck(Path(config_path)))

    failed = [check for check in checks if not check.run().passed]

    table = Table(title="Diagnostic Results", box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for check in checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, check.message)

    console.print(table)

    if failed:
        console.print(f"\n[red]{len(failed)} check(s) failed[/red]")
        sys.exit(1)
    console.print("\n[green]All checks passed[/green]")
