import click

from caconf.core.config import decode, encode
from caconf.interfaces.cli.utils import output_error, output_result


@click.command(name="duration")
@click.argument("values", nargs=-1, required=True)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
def duration(values: tuple[str, ...], json_output: bool) -> None:
    """Print the canonical form of one or more durations.

    \b
    Examples:
        caconf duration 90m          # 1h30m0s
        caconf duration 500ms 1.5h
    """
    try:
        decoded = [decode(value) for value in values]
    except Exception as e:
        output_error(e, json_output)
        return

    if json_output:
        output_result(
            [
                {"input": value, "canonical": encode(d), "nanoseconds": d.nanoseconds}
                for value, d in zip(values, decoded)
            ],
            json_output,
        )
    else:
        output_result([encode(d) for d in decoded])
