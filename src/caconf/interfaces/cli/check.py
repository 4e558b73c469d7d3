from pathlib import Path
from typing import Any

import click

from caconf.core.config import (
    CONFIG_KINDS,
    PAConfig,
    iter_indirect_values,
    load_config,
)
from caconf.interfaces.cli.utils import configure_logging, output_error, output_result


def _format_check_result(result: dict[str, Any]) -> str:
    output = [
        f"{click.style('✅ Config is valid!', fg='green', bold=True)}",
        f"{click.style('📄 File:', fg='cyan')} {result['path']}",
        f"{click.style('Kind:', fg='cyan')} {result['kind']}",
    ]

    values = result["indirect_values"]
    if values:
        output.append(f"\n{click.style('🔑 Indirect values:', fg='cyan', bold=True)}")
        for value in values:
            output.append(
                f"  {click.style('✓', fg='green')} {value['field']} "
                f"({value['source']}, {value['length']} chars)"
            )
    elif result["resolved"]:
        output.append("No indirect values to resolve")

    if result.get("challenges"):
        output.append(
            f"{click.style('Challenges:', fg='cyan')} {', '.join(result['challenges'])}"
        )

    return "\n".join(output)


@click.command(name="check")
@click.argument("config_file", envvar="CACONF_CONFIG", type=click.Path(path_type=Path))
@click.option(
    "--kind",
    required=True,
    type=click.Choice(sorted(CONFIG_KINDS)),
    help="Kind of config the file (or section) holds",
)
@click.option("--section", help="Dotted path of the section to check, e.g. 'ocspUpdater'")
@click.option(
    "--resolve/--no-resolve",
    default=True,
    show_default=True,
    help="Read every indirected value from its file or inline literal",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def check(
    config_file: Path,
    kind: str,
    section: str | None,
    resolve: bool,
    json_output: bool,
    debug: bool,
) -> None:
    """Check that a config document loads and its values resolve.

    Secrets are read to prove they resolve but are never printed; only their
    source and length are shown.

    \b
    Examples:
        caconf check config/ca.json --kind pa --section pa
        caconf check config/ocsp-updater.yaml --kind ocsp-updater --section ocspUpdater
        caconf check smtp.yaml --kind smtp --no-resolve
    """
    configure_logging(debug=debug)

    try:
        config = load_config(config_file, CONFIG_KINDS[kind], section=section)

        indirect_values = []
        if resolve:
            for field, value in iter_indirect_values(config, prefix=section or kind):
                resolved = value.resolve()
                indirect_values.append(
                    {
                        "field": field,
                        "source": "file" if value.uses_file() else "inline",
                        "length": len(resolved),
                    }
                )

        result: dict[str, Any] = {
            "path": str(config_file),
            "kind": kind,
            "resolved": resolve,
            "indirect_values": indirect_values,
        }

        if isinstance(config, PAConfig):
            config.check_challenges()
            result["challenges"] = list(config.challenges)

        if json_output:
            output_result(result, json_output)
        else:
            click.echo(_format_check_result(result))

    except click.Abort:
        raise
    except Exception as e:
        output_error(e, json_output, debug)
