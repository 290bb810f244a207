# src/fleetctl/apps/cli/app.py
from __future__ import annotations

from typing import Optional

from dotenv import find_dotenv, load_dotenv
import typer
from rich import print
from rich.markup import escape

# .env once, before Settings reads the environment
load_dotenv(find_dotenv(usecwd=True))

from fleetctl.apps.bootstrap import init_ctx
from fleetctl.apps.cli.commands import process
from fleetctl.domain import FleetError
from fleetctl.services.context import get_ctx
from fleetctl.services.settings import Settings

app = typer.Typer(help="fleetctl: start and stop cluster processes on one host or the whole fleet")


@app.callback()
def main(
    home: Optional[str] = typer.Option(None, "--home", help="fleetctl home (default: $FLEETCTL_HOME or ~/.fleetctl)"),
    local_host: Optional[str] = typer.Option(None, "--local-host", help="Identifier of this host (default: hostname)"),
):
    """Builds the context before any subcommand runs."""
    try:
        settings = Settings.from_sources().with_overrides(home_dir=home, local_host=local_host)
    except FleetError as e:
        print(f"[red]✗[/red] {escape(str(e))}")
        raise typer.Exit(1)
    init_ctx(settings)


@app.command("where")
def where():
    """Show where configuration is read from."""
    s = get_ctx().settings
    typer.echo(f"home:       {s.home_dir}")
    typer.echo(f"hosts file: {s.hosts_file}")
    typer.echo(f"env file:   {s.env_file}")
    typer.echo(f"launcher:   {s.launcher_path}")
    typer.echo(f"local host: {s.local_host}")


app.add_typer(process.app, name="process", help="Start/stop masters, workers, proxies and groups of them")

if __name__ == "__main__":
    app()
