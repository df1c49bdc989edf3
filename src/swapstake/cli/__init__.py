import tomllib
from pathlib import Path

import click
from pydantic import ValidationError

from swapstake.config import CONFIG_FILE, load_settings
from swapstake.version import __version__


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    show_default=True,
    help="Path to the TOML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    try:
        ctx.obj = load_settings(config_path)
    except (ValidationError, tomllib.TOMLDecodeError) as exc:
        raise click.ClickException(f"Invalid configuration in {config_path}: {exc}") from exc


from . import config, run  # noqa: E402, F401
