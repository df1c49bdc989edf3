import click
import tomlkit
from pydantic import TypeAdapter

from swapstake.config import SECRET_FIELDS, Settings

from . import cli


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    type=str,
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    type=str,
    help="Show configuration in TOML format (default)",
    default=True,
)
@click.pass_obj
def config_show(settings: Settings, output_format: str) -> None:
    """
    Display the current configuration in JSON or TOML (default) format. The private key and RPC
    endpoint are never shown.
    """

    config_dict = settings.model_dump(
        mode="json",
        exclude=set(SECRET_FIELDS),
        exclude_none=True,
    )

    match output_format:
        case "json":
            click.echo(
                TypeAdapter(dict).dump_json(
                    config_dict,
                    indent=2,
                ),
            )
        case "toml":
            click.echo(
                tomlkit.dumps(
                    config_dict,
                ),
            )
        case _:
            ...
