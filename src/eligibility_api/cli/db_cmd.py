"""Database migration commands for the address and zone tables."""

from pathlib import Path

import typer
from alembic.config import Config
from loguru import logger

db_app = typer.Typer()

DEFAULT_CONFIG = Path("alembic.ini")

_config_option = typer.Option(
    DEFAULT_CONFIG,
    "--config",
    "-c",
    envvar="ALEMBIC_CONFIG",
    help="Path to alembic.ini",
)


def _alembic_config(config_path: Path) -> Config:
    """Load an Alembic config whose script location resolves next to the ini file.

    Raises:
        typer.Exit: If the ini file does not exist.
    """
    path = config_path.expanduser().resolve()
    if not path.is_file():
        typer.echo(f"Alembic config not found: {config_path}", err=True)
        raise typer.Exit(code=1)

    config = Config(str(path))
    script_location = Path(config.get_main_option("script_location") or "alembic")
    if not script_location.is_absolute():
        config.set_main_option("script_location", str(path.parent / script_location))
    return config


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    config_path: Path = _config_option,
) -> None:
    """Apply migrations up to the target revision."""
    from alembic import command

    config = _alembic_config(config_path)
    logger.info(f"Upgrading eligibility database to {revision}")
    command.upgrade(config, revision)
    logger.info("Database upgrade complete")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
    config_path: Path = _config_option,
) -> None:
    """Roll migrations back to the target revision."""
    from alembic import command

    config = _alembic_config(config_path)
    logger.info(f"Downgrading eligibility database to {revision}")
    command.downgrade(config, revision)
    logger.info("Database downgrade complete")


@db_app.command()
def current(config_path: Path = _config_option) -> None:
    """Show the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(config_path), verbose=True)


@db_app.command()
def heads(config_path: Path = _config_option) -> None:
    """Show the newest revision shipped with the service."""
    from alembic.script import ScriptDirectory

    script = ScriptDirectory.from_config(_alembic_config(config_path))
    for head in script.get_heads():
        revision = script.get_revision(head)
        typer.echo(f"{head}  {revision.doc if revision is not None else ''}")
