from pathlib import Path

import click

from caconf.core.config import CONFIG_KINDS, dump_config, load_config
from caconf.interfaces.cli.utils import configure_logging, output_error


@click.command(name="convert")
@click.argument("config_file", envvar="CACONF_CONFIG", type=click.Path(path_type=Path))
@click.option(
    "--kind",
    required=True,
    type=click.Choice(sorted(CONFIG_KINDS)),
    help="Kind of config the file (or section) holds",
)
@click.option("--section", help="Dotted path of the section to convert")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice(["json", "yaml"]),
    help="Output format",
)
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def convert(config_file: Path, kind: str, section: str | None, target: str, debug: bool) -> None:
    """Rewrite a config document (or one section) as JSON or YAML.

    The document is validated on the way through, so durations come out in
    canonical form. Indirected values are copied as written, files are not read.

    \b
    Examples:
        caconf convert config/ca.json --kind pa --section pa --to yaml
        caconf convert amqp.yaml --kind amqp --to json > amqp.json
    """
    configure_logging(debug=debug)

    try:
        config = load_config(config_file, CONFIG_KINDS[kind], section=section)
        click.echo(dump_config(config, target), nl=False)
    except click.Abort:
        raise
    except Exception as e:
        output_error(e, debug=debug)
