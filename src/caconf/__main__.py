import click

from caconf.core.version import PACKAGE_VERSION
from caconf.interfaces.cli.check import check
from caconf.interfaces.cli.convert import convert
from caconf.interfaces.cli.duration import duration


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name="caconf")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """caconf CLI"""
    # Show help when no subcommand is provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(check)
cli.add_command(convert)
cli.add_command(duration)


if __name__ == "__main__":
    cli()
