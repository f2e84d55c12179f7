# move_deployer/cli/utils/output.py
"""Output formatting utilities"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_ERROR, EMOJI_KEY, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import DeployConfig, DeployResult, PackageState, ProvisionedAccount, RunStatus

console = Console()

_STATE_STYLES = {
    PackageState.RECORDED: "green",
    PackageState.SKIPPED: "dim",
    PackageState.FAILED: "red",
    PackageState.PENDING: "yellow",
}


def format_config_summary(config: DeployConfig) -> None:
    """Display what a run is about to deploy"""
    table = Table(title="Deployment Plan", box=box.ROUNDED)
    table.add_column("#", style="dim", width=3)
    table.add_column("Address Name", style="cyan")
    table.add_column("Package")
    table.add_column("Status")

    for i, (package_path, address_name) in enumerate(config.packages, 1):
        known = config.deployed_addresses.get(address_name)
        status = f"[dim]already at {known}[/dim]" if known else "[yellow]to deploy[/yellow]"
        table.add_row(str(i), address_name, str(package_path), status)

    console.print(table)
    console.print(
        f"Network: [bold]{config.network.value}[/bold]  "
        f"Mode: [bold]{config.mode.value}[/bold]  "
        f"Artifacts: [bold]{config.included_artifacts}[/bold]"
    )


def show_generated_account(account: ProvisionedAccount) -> None:
    """Show a generated sender account; its key exists nowhere else"""
    if not account.generated:
        console.print(f"Sender account: [bold]{account.address}[/bold]")
        return

    lines = [
        f"[bold]Address:[/bold] {account.address}",
        f"[bold]Private key:[/bold] {account.private_key}",
        f"[bold]Funded:[/bold] {account.funded_amount} octas",
        "",
        f"[yellow]{EMOJI_WARNING} Store this key now. It is not saved anywhere "
        f"and controls the deployed packages.[/yellow]",
    ]
    console.print(Panel(
        "\n".join(lines),
        title=f"{EMOJI_KEY} Generated Account",
        border_style="yellow"
    ))


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy operation result"""
    if result.status == RunStatus.CANCELLED:
        console.print("[yellow]Deployment cancelled, nothing was deployed[/yellow]")
        if result.report_path:
            console.print(f"Report: {result.report_path}")
        return

    if result.package_states:
        table = Table(box=box.SIMPLE)
        table.add_column("Address Name", style="cyan")
        table.add_column("State")
        table.add_column("Deployed At")
        table.add_column("Txns", justify="right")

        records = {r.address_name: r for r in result.records}
        for name, state in result.package_states.items():
            style = _STATE_STYLES.get(state, "cyan")
            record = records.get(name)
            table.add_row(
                name,
                f"[{style}]{state.value}[/{style}]",
                record.deployed_at if record else "",
                str(len(record.tx_info)) if record else ""
            )
        console.print(table)

    if result.success:
        lines = [
            f"[green]{EMOJI_SUCCESS}[/green] Deployment completed successfully!",
            "",
            f"[bold]Account:[/bold] {result.report.account}",
            f"[bold]Network:[/bold] {result.report.network}",
            f"[bold]Deployed:[/bold] {len(result.deployed)}",
            f"[bold]Skipped:[/bold] {len(result.skipped)}",
        ]
        if result.report_path:
            lines.append(f"[bold]Report:[/bold] {result.report_path}")

        console.print(Panel("\n".join(lines), title="Deploy Result", border_style="green"))
    else:
        lines = [f"[red]{EMOJI_ERROR} Deploy failed:[/red] {result.error}"]

        if result.deployed:
            lines.append("")
            lines.append(f"[yellow]Partially deployed: {len(result.deployed)} package(s)[/yellow]")
        if result.report_path:
            lines.append(f"[bold]Report:[/bold] {result.report_path}")
            lines.append(f"Resume with: --resume-from {result.report_path}")

        console.print(Panel("\n".join(lines), title="Deploy Error", border_style="red"))
