"""Deploy command implementation"""

import sys

import click
from click.core import ParameterSource

from ..utils.interactive import confirm
from ..utils.output import (
    console,
    format_config_summary,
    format_deploy_result,
    show_generated_account,
)
from ...api import Deployer
from ...api.exceptions import DeployerError
from ...models import DeployMode, Network
from ...services.config_service import ConfigService, parse_address_map


def _explicit(ctx, name, value):
    """Flag value if given on the command line, None otherwise"""
    if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
        return value
    return None


def _split_list(ctx, param, value):
    """Comma separated option value to list"""
    if value is None:
        return None
    return [item.strip() for item in value.split(',') if item.strip()]


def _address_map(ctx, param, value):
    try:
        return parse_address_map(value) if value else None
    except DeployerError as e:
        raise click.BadParameter(str(e))


@click.command()
@click.option('--private-key', help='Private key of the sender account')
@click.option('--mode', type=click.Choice([m.value for m in DeployMode]),
              help='Publish under the sender account or into new objects [default: object]')
@click.option('--package-paths', callback=_split_list,
              help='Package directories to deploy, comma separated, in deployment order')
@click.option('--address-names', callback=_split_list,
              help='Named address of each package (as in its Move.toml), comma separated')
@click.option('--network', type=click.Choice([n.value for n in Network]),
              help='Network to deploy to [default: devnet]')
@click.option('--output-json', type=click.Path(dir_okay=False),
              help='Deployment report path [default: deploy-report.json]')
@click.option('--deployed-addresses', callback=_address_map,
              help='Already deployed addresses, e.g. addr_1=0x1,addr_2=0x2')
@click.option('--rest-url', help='REST url of the network (required for local)')
@click.option('--faucet-url', help='Faucet url, used when no private key is given')
@click.option('--publish-code', is_flag=True,
              help='Include source and metadata artifacts in the publish payload')
@click.option('-y', '--yes', 'assume_yes', is_flag=True,
              help='Automatically confirm prompts')
@click.option('--config-path', type=click.Path(exists=True, dir_okay=False),
              help='Path to a TOML configuration file')
@click.option('--resume-from', type=click.Path(exists=True, dir_okay=False),
              help='Report of a previous run; its addresses are treated as deployed')
@click.pass_context
def deploy(ctx, private_key, mode, package_paths, address_names, network, output_json,
           deployed_addresses, rest_url, faucet_url, publish_code, assume_yes,
           config_path, resume_from):
    """Deploy Move packages in order

    Packages are deployed left to right. Each package's named address is
    bound to where it was deployed, so later packages may depend on
    earlier ones. Packages whose address is already known are skipped.

    Command line options override values from --config-path.

    Examples:

        # Deploy two packages to testnet as objects
        move-deployer deploy --network testnet --private-key 0x... \\
            --package-paths ./libs,./app --address-names lib_addr,app_addr

        # Continue a run that stopped partway
        move-deployer deploy --config-path deploy.toml --resume-from deploy-report.json
    """
    overrides = {
        'private_key': private_key,
        'mode': mode,
        'package_paths': package_paths,
        'address_names': address_names,
        'network': network,
        'output_json': output_json,
        'deployed_addresses': deployed_addresses,
        'rest_url': rest_url,
        'faucet_url': faucet_url,
        'publish_code': _explicit(ctx, 'publish_code', publish_code),
        'assume_yes': _explicit(ctx, 'assume_yes', assume_yes),
    }

    try:
        config = ConfigService(config_path).build(overrides, resume_from=resume_from)
        config.validate()
    except DeployerError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    format_config_summary(config)

    deployer = Deployer(
        confirm=confirm,
        on_account=show_generated_account,
    )

    console.print(f"\n[cyan]Deploying to {config.network.value}...[/cyan]")
    result = deployer.deploy(config)

    format_deploy_result(result)

    if not result.success:
        if ctx.obj is not None and getattr(ctx.obj, 'debug', False) and result.error is not None:
            console.print(f"[dim]Error code: {getattr(result.error, 'error_code', None)}[/dim]")
        sys.exit(1)
