"""
tfinventory CLI entry point. Speaks the Ansible dynamic inventory protocol:
``--list`` prints every group, ``--host <address>`` prints one host's vars.
"""
import sys
from typing import Optional

import click
from rich.console import Console

from tfinventory import __version__
from tfinventory import inventory as inventory_builder
from tfinventory.config import KEY_NAME_ENV, InventoryConfig
from tfinventory.models.errors import StateFileError
from tfinventory.parsers import state
from tfinventory.reporters import ini_reporter, json_reporter, yaml_reporter


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(__version__)
@click.argument("state_path", required=False, type=click.Path())
@click.option("--list", "list_hosts", is_flag=True, default=False, help="Print the whole inventory (default).")
@click.option("--host", "host", default=None, help="Print the variables of a single host.")
@click.option("--inventory", "as_inventory", is_flag=True, default=False, help="Print a static INI inventory.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["json", "ini", "yaml"], case_sensitive=False),
    default="json",
    show_default=True,
    help="Output format for the whole inventory.",
)
@click.option(
    "--key-name",
    envvar=KEY_NAME_ENV,
    default=None,
    help="Read addresses from this attribute only.",
)
@click.option("--no-color", is_flag=True, default=False, help="Disable rich terminal color output.")
def cli(
    state_path: Optional[str],
    list_hosts: bool,
    host: Optional[str],
    as_inventory: bool,
    output_format: str,
    key_name: Optional[str],
    no_color: bool,
) -> None:
    """
    Build an Ansible inventory from a Terraform state file.

    STATE_PATH is a state file or a directory holding terraform.tfstate;
    it defaults to $TF_STATE, then ./terraform.tfstate. Use '-' for stdin.
    """
    stderr = Console(stderr=True, no_color=no_color)
    config = InventoryConfig.from_env()
    if key_name is not None:
        config.key_name = key_name or None

    path = state.resolve_state_path(state_path, config)
    try:
        pairs = state.parse_file(path)
    except StateFileError as exc:
        stderr.print(f"[red]Error reading state:[/red] {exc}")
        sys.exit(2)

    inv = inventory_builder.build(pairs, config)

    if host is not None:
        if inv.host(host) is None:
            stderr.print(f"[yellow]Warning:[/yellow] no host with address {host} in the inventory")
        click.echo(json_reporter.build_host(inv, host))
        return

    fmt = "ini" if as_inventory else output_format.lower()
    if fmt == "ini":
        click.echo(ini_reporter.build_report(inv), nl=False)
    elif fmt == "yaml":
        click.echo(yaml_reporter.build_report(inv), nl=False)
    else:
        click.echo(json_reporter.build_list(inv))


def main():
    cli()


if __name__ == "__main__":
    main()
