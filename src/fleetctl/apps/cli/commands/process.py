"""
fleetctl process start masters
fleetctl process start worker --hosts w1,w2 -a
fleetctl process stop all -s
fleetctl process start local --dry-run
"""

from __future__ import annotations
import os
import traceback
from typing import Any, Dict, Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from fleetctl.domain import AggregateResult, FleetError, Scope, StartRequest, StopRequest
from fleetctl.services.context import get_ctx
from fleetctl.services.process import AnyProcess

app = typer.Typer(help="Start/stop cluster processes")


def _pick_scope(process: AnyProcess, hosts: Optional[str], all_: bool, local: bool) -> Scope:
    chosen = [s for s in (hosts is not None, all_, local) if s]
    if len(chosen) > 1:
        raise typer.BadParameter("use only one of --hosts, --all, --local")
    if hosts is not None:
        return Scope.parse(hosts)
    if all_:
        return Scope.all()
    if local:
        return Scope.local()
    return process.descriptor.default_scope


def _lookup(name: str) -> AnyProcess:
    try:
        return get_ctx().registry.get(name)
    except FleetError as e:
        raise typer.BadParameter(str(e), param_hint="NAME") from None


def _render(result: AggregateResult, action: str) -> None:
    table = Table(title=f"{action} results")
    table.add_column("process")
    table.add_column("host")
    table.add_column("status")
    table.add_column("detail", overflow="fold")
    for o in result.outcomes:
        status = "[green]ok[/green]" if o.ok else "[red]failed[/red]"
        detail = o.error.reason if o.error else (o.stdout.strip().splitlines() or [""])[-1]
        table.add_row(escape(o.process), escape(o.host), status, escape(detail))
    print(table)


def _fail(e: Exception) -> None:
    if os.getenv("FLEETCTL_CLI_DEBUG") == "1":
        traceback.print_exc()
    print(f"[red]✗[/red] {escape(str(e))}")
    raise typer.Exit(1)


def _execute(process: AnyProcess, req: StartRequest | StopRequest, action: str) -> None:
    ctx = get_ctx()
    process.set_env_vars(ctx.config, ctx.env)
    runtime = ctx.runtime()
    try:
        if isinstance(req, StartRequest):
            result = process.start(req, runtime)
        else:
            result = process.stop(req, runtime)
    except FleetError as e:
        _fail(e)
        return

    _render(result, action)
    if not result.success:
        _fail(result.error)
    print(f"[green]✓[/green] {action} {process.descriptor.name}: {len(result.outcomes)} host(s) ok")


def _show(command: str) -> None:
    for line in command.splitlines():
        typer.echo(line)


@app.command("start")
def start(
    name: str = typer.Argument(..., help="Process name (see `fleetctl process list`)"),
    async_: bool = typer.Option(False, "--async", "-a", help="Do not wait for the process to come up"),
    skip_kill: bool = typer.Option(False, "--skip-kill", "-N", help="Do not kill a running instance first"),
    hosts: Optional[str] = typer.Option(None, "--hosts", help="Comma separated hosts to act on"),
    all_: bool = typer.Option(False, "--all", help="Every host in the cluster membership"),
    local: bool = typer.Option(False, "--local", help="Only this host"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command line(s) and exit"),
):
    """Start a process on its scope."""
    process = _lookup(name)
    flags: Dict[str, Any] = {"async": async_, "skip_kill": skip_kill}
    req = StartRequest(scope=_pick_scope(process, hosts, all_, local), flags=flags)
    if dry_run:
        try:
            _show(process.build_start_command(req))
        except FleetError as e:
            _fail(e)
        return
    _execute(process, req, "start")


@app.command("stop")
def stop(
    name: str = typer.Argument(..., help="Process name (see `fleetctl process list`)"),
    soft: bool = typer.Option(False, "--soft", "-s", help="SIGTERM and wait instead of killing"),
    hosts: Optional[str] = typer.Option(None, "--hosts", help="Comma separated hosts to act on"),
    all_: bool = typer.Option(False, "--all", help="Every host in the cluster membership"),
    local: bool = typer.Option(False, "--local", help="Only this host"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the command line(s) and exit"),
):
    """Stop a process on its scope."""
    process = _lookup(name)
    req = StopRequest(scope=_pick_scope(process, hosts, all_, local), flags={"soft": soft})
    if dry_run:
        try:
            _show(process.build_stop_command(req))
        except FleetError as e:
            _fail(e)
        return
    _execute(process, req, "stop")


@app.command("list")
def list_processes():
    """Known processes."""
    table = Table()
    table.add_column("name")
    table.add_column("kind")
    table.add_column("default scope")
    table.add_column("description")
    for d in get_ctx().registry.descriptors():
        table.add_row(d.name, d.kind.value, str(d.default_scope), d.help)
    print(table)
