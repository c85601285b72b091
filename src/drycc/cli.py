"""Drycc controller CLI utilities built with Typer + Rich."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .api.base import Model
from .client import Client, Listing
from .errors import SDKError
from .logging_config import setup_logging
from .resources.apps import list_apps
from .resources.config import get as get_config
from .resources.limits import plans as list_plans
from .resources.limits import specs as list_specs
from .resources.ps import by_type, list_pods
from .resources.volumes import list_volumes
from .version import API_VERSION, Compatibility

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Inspect apps, processes and volumes on a Drycc controller.")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@app.callback()
def main_options(
    ctx: typer.Context,
    controller: Optional[str] = typer.Option(None, "--controller", "-c", help="Controller URL (default: $DRYCC_CONTROLLER_URL)."),
    token: Optional[str] = typer.Option(None, "--token", help="API token (default: $DRYCC_TOKEN)."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip TLS certificate verification."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr."),
):
    """Global connection options."""

    setup_logging("DEBUG" if verbose else "WARNING")
    ctx.obj = {"controller": controller, "token": token, "verify_ssl": False if insecure else None}


def _call(ctx: typer.Context, op: Callable[[Client], Any]) -> Any:
    opts: Dict[str, Any] = ctx.obj or {}
    try:
        client = Client(opts.get("controller"), opts.get("token"), verify_ssl=opts.get("verify_ssl"))
        result = op(client)
    except SDKError as exc:
        console.print(Panel(str(exc) or exc.code, title=f"Error: {exc.code}", border_style="red"))
        raise typer.Exit(code=1)
    compatibility = result.compatibility if isinstance(result, Listing) else client.compatibility
    if compatibility is Compatibility.MINOR_SKEW:
        err_console.print(
            Panel(
                f"Controller API {client.controller_api_version} differs from SDK API {API_VERSION}; "
                "minor versions are backward compatible.",
                title="Version skew",
                border_style="yellow",
            )
        )
    return result


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def _render_listing(
    items: Sequence[Model],
    count: int,
    *,
    title: str,
    columns: List[Tuple[str, str]],
    output_format: OutputFormat,
) -> None:
    if output_format is OutputFormat.JSON:
        console.print_json(data={"count": count, "results": [item.to_dict() for item in items]})
        return
    if not items:
        console.print(Panel(f"No {title.lower()} found", title=title, border_style="yellow"))
        return
    table = Table(title=f"{title} ({len(items)} of {count})", show_header=True, header_style="bold blue")
    for header, _ in columns:
        table.add_column(header)
    for item in items:
        table.add_row(*(_cell(getattr(item, attr, None)) for _, attr in columns))
    console.print(table)


@app.command()
def apps(
    ctx: typer.Context,
    results: int = typer.Option(100, "--results", "-n", help="Maximum number of items to fetch (0 = one default page)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """List the apps you have access to."""

    items, count, _ = _call(ctx, lambda c: list_apps(c, results))
    _render_listing(
        items,
        count,
        title="Apps",
        columns=[("id", "id"), ("owner", "owner"), ("updated", "updated")],
        output_format=output_format,
    )


@app.command()
def ps(
    ctx: typer.Context,
    app_id: str = typer.Argument(..., help="App name."),
    results: int = typer.Option(100, "--results", "-n", help="Maximum number of items to fetch (0 = one default page)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """List an app's processes grouped by type."""

    pods, count, _ = _call(ctx, lambda c: list_pods(c, app_id, results))
    if output_format is OutputFormat.JSON:
        _render_listing(pods, count, title="Processes", columns=[], output_format=output_format)
        return
    if not pods:
        console.print(Panel(f"No processes found for {app_id}", title="Processes", border_style="yellow"))
        return
    for pod_type in by_type(pods):
        table = Table(title=f"{pod_type.type} ({len(pod_type.pods)})", show_header=True, header_style="bold blue")
        table.add_column("name")
        table.add_column("state")
        table.add_column("ready")
        table.add_column("restarts")
        for pod in pod_type.pods:
            table.add_row(pod.name, pod.state, pod.ready, str(pod.restarts))
        console.print(table)


@app.command()
def volumes(
    ctx: typer.Context,
    app_id: str = typer.Argument(..., help="App name."),
    results: int = typer.Option(100, "--results", "-n", help="Maximum number of items to fetch (0 = one default page)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """List an app's volumes."""

    items, count, _ = _call(ctx, lambda c: list_volumes(c, app_id, results))
    _render_listing(
        items,
        count,
        title="Volumes",
        columns=[("name", "name"), ("size", "size"), ("type", "type"), ("path", "path")],
        output_format=output_format,
    )


@app.command()
def config(
    ctx: typer.Context,
    app_id: str = typer.Argument(..., help="App name."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """Show an app's config values."""

    cfg = _call(ctx, lambda c: get_config(c, app_id))
    if output_format is OutputFormat.JSON:
        console.print_json(data=cfg.to_dict())
        return
    values = cfg.values or []
    if not values:
        console.print(Panel(f"No config values set for {app_id}", title="Config", border_style="yellow"))
        return
    table = Table(title=f"{app_id} config", show_header=True, header_style="bold blue")
    table.add_column("name")
    table.add_column("value")
    table.add_column("ptype")
    table.add_column("group")
    for value in values:
        table.add_row(value.name, str(value.value), value.ptype or "", value.group or "")
    console.print(table)


@app.command()
def specs(
    ctx: typer.Context,
    keywords: str = typer.Option("", help="Comma separated keywords to filter on."),
    results: int = typer.Option(100, "--results", "-n", help="Maximum number of items to fetch (0 = one default page)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """List limit specs."""

    items, count, _ = _call(ctx, lambda c: list_specs(c, keywords, results))
    _render_listing(
        items,
        count,
        title="Specs",
        columns=[("id", "id"), ("keywords", "keywords"), ("disabled", "disabled")],
        output_format=output_format,
    )


@app.command()
def plans(
    ctx: typer.Context,
    spec_id: str = typer.Option("", "--spec", help="Only plans of this spec."),
    cpu: int = typer.Option(0, help="Only plans with this many CPUs."),
    memory: int = typer.Option(0, help="Only plans with this much memory (GiB)."),
    results: int = typer.Option(100, "--results", "-n", help="Maximum number of items to fetch (0 = one default page)."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format (text or json).",
    ),
):
    """List limit plans."""

    items, count, _ = _call(ctx, lambda c: list_plans(c, spec_id, cpu, memory, results))
    _render_listing(
        items,
        count,
        title="Plans",
        columns=[("id", "id"), ("cpu", "cpu"), ("memory", "memory"), ("disabled", "disabled")],
        output_format=output_format,
    )


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
