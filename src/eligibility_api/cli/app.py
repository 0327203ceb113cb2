"""Typer CLI root application with serve command."""

import typer

from eligibility_api.core.config import get_settings
from eligibility_api.core.logging import setup_logging_from_settings

app = typer.Typer(name="eligibility-api", help="Address eligibility lookup service CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    setup_logging_from_settings(get_settings())


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "eligibility_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from eligibility_api.cli.cache_cmd import cache_app
    from eligibility_api.cli.check_cmd import check
    from eligibility_api.cli.db_cmd import db_app
    from eligibility_api.cli.zones_cmd import zones_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(zones_app, name="zones", help="Eligibility zone commands")
    app.add_typer(cache_app, name="cache", help="Eligibility cache commands")
    app.command("check")(check)


_register_subcommands()
