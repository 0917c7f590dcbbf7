"""CLI commands for flow and pipe sizing."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from hydrohead.core.hydraulics import velocity_fps
from hydrohead.core.pipes import PipeDataError, pipe_dimensions
from hydrohead.core.sizing import mbh_to_gpm, suggest_pipe_size, tonnage_to_gpm


@click.group("size")
@click.pass_context
def size(ctx: click.Context) -> None:
    """Flow and pipe sizing helpers."""
    pass


@size.command("gpm")
@click.option("--tons", type=float, default=None, help="Cooling load [tons].")
@click.option("--mbh", type=float, default=None, help="Heating load [MBH].")
@click.option("--delta-t", type=float, default=None, help="Design ΔT [°F] (default 10 for tons, 20 for MBH).")
@click.pass_context
def size_gpm(ctx: click.Context, tons: float | None, mbh: float | None, delta_t: float | None) -> None:
    """Design flow from a cooling or heating load."""
    console: Console = ctx.obj.get("console", Console())
    if (tons is None) == (mbh is None):
        console.print("[red]Error:[/red] Give exactly one of --tons or --mbh.")
        raise SystemExit(1)

    try:
        if tons is not None:
            dt = 10.0 if delta_t is None else delta_t
            flow = tonnage_to_gpm(tons, dt)
            load = f"{tons:g} tons"
        else:
            dt = 20.0 if delta_t is None else delta_t
            flow = mbh_to_gpm(mbh, dt)
            load = f"{mbh:g} MBH"
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"{load} at ΔT {dt:g}°F → [green]{flow:.1f} GPM[/green]")


@size.command("pipe")
@click.option("--flow", type=float, required=True, help="Flow [GPM].")
@click.option("--material", default="copper_type_l", show_default=True, help="Pipe material id.")
@click.option("--velocity", type=float, default=6.0, show_default=True, help="Target maximum velocity [ft/s].")
@click.pass_context
def size_pipe(ctx: click.Context, flow: float, material: str, velocity: float) -> None:
    """Smallest pipe size that keeps velocity under the target."""
    console: Console = ctx.obj.get("console", Console())
    try:
        nominal = suggest_pipe_size(flow, material, velocity)
    except PipeDataError as e:
        console.print(f"[red]Error:[/red] {e.args[0]}")
        raise SystemExit(1)

    dims = pipe_dimensions(material, nominal)
    v = velocity_fps(flow, dims.area_ft2)

    table = Table(title="Pipe Sizing")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")
    table.add_row("Material", material, "")
    table.add_row("Nominal Size", nominal, "in")
    table.add_row("Inner Diameter", f"{dims.inner_diameter_in:.3f}", "in")
    table.add_row("Velocity", f"{v:.2f}", "ft/s")
    console.print(table)
    if v > velocity:
        console.print(f"[yellow]Largest {material} size still exceeds {velocity:g} ft/s.[/yellow]")
