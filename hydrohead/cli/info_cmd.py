"""CLI commands for listing pipe materials, sizes, fittings and fluid properties."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from hydrohead.core.fittings import CATEGORIES, FlowCoefficient, LengthRatio, list_fittings
from hydrohead.core.fluids import fluid_display_name, fluid_properties
from hydrohead.core.pipes import (
    PipeDataError,
    available_sizes,
    get_material_info,
    list_materials,
    pipe_dimensions,
)
from hydrohead.core.system import FluidType


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """List catalogs and fluid properties."""
    pass


@info.command("materials")
@click.pass_context
def info_materials(ctx: click.Context) -> None:
    """List available pipe materials."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Pipe Materials")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Roughness (ft)", justify="right")
    table.add_column("Sizes", justify="right", style="dim")

    for mat_id in list_materials():
        mat = get_material_info(mat_id)
        table.add_row(mat_id, mat["name"], f"{mat['roughness_ft']:.6f}", str(len(mat["dimensions"])))
    console.print(table)


@info.command("sizes")
@click.argument("material")
@click.pass_context
def info_sizes(ctx: click.Context, material: str) -> None:
    """List nominal sizes and dimensions for MATERIAL."""
    console: Console = ctx.obj.get("console", Console())
    try:
        sizes = available_sizes(material)
    except PipeDataError as e:
        console.print(f"[red]Error:[/red] {e.args[0]}")
        raise SystemExit(1)

    table = Table(title=get_material_info(material)["name"])
    table.add_column("Size", style="cyan")
    table.add_column("OD (in)", justify="right")
    table.add_column("ID (in)", justify="right", style="green")
    table.add_column("Wall (in)", justify="right")
    table.add_column("Area (in²)", justify="right")
    table.add_column("Volume (gal/ft)", justify="right")
    for size in sizes:
        dims = pipe_dimensions(material, size)
        table.add_row(
            size,
            f"{dims.outer_diameter_in:.3f}",
            f"{dims.inner_diameter_in:.3f}",
            f"{dims.wall_thickness_in:.3f}",
            f"{dims.area_in2:.4f}",
            f"{dims.volume_gal_per_ft:.4f}",
        )
    console.print(table)


@info.command("fittings")
@click.option("--category", type=click.Choice(CATEGORIES), default=None, help="Filter by category.")
@click.pass_context
def info_fittings(ctx: click.Context, category: str | None) -> None:
    """List catalog fittings, valves and devices."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Fittings & Devices")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Category")
    table.add_column("Method")
    table.add_column("Value", justify="right")
    table.add_column("Notes", style="dim")

    for item in list_fittings(category):
        res = item.resistance
        if isinstance(res, LengthRatio):
            value = f"L/D {res.ratio:g}"
        elif isinstance(res, FlowCoefficient) and res.cv_by_size:
            value = f"Cv {min(res.cv_by_size.values()):g}–{max(res.cv_by_size.values()):g}"
        elif isinstance(res, FlowCoefficient) and res.default_cv is not None:
            value = f"Cv {res.default_cv:g}"
        else:
            value = "user input"
        table.add_row(item.id, item.display_name, item.category, item.method.value, value, item.notes)
    console.print(table)


@info.command("fluid")
@click.argument("fluid", type=click.Choice([f.value for f in FluidType]))
@click.option("--concentration", "-c", type=float, default=0.0, show_default=True, help="Glycol concentration [%].")
@click.option(
    "--temp",
    "temps",
    type=float,
    multiple=True,
    help="Temperature [°F]; repeat for several (default: 40–200 °F in 20 °F steps).",
)
@click.pass_context
def info_fluid(ctx: click.Context, fluid: str, concentration: float, temps: tuple[float, ...]) -> None:
    """Show interpolated properties of FLUID."""
    console: Console = ctx.obj.get("console", Console())
    temps = temps or tuple(float(t) for t in range(40, 201, 20))

    title = fluid_display_name(fluid)
    if FluidType(fluid).is_glycol:
        title += f" {concentration:g}%"
    table = Table(title=title)
    table.add_column("T (°F)", style="cyan", justify="right")
    table.add_column("Density (lb/ft³)", justify="right")
    table.add_column("Viscosity (cP)", justify="right")
    table.add_column("SG", justify="right")
    table.add_column("cp (Btu/lb·°F)", justify="right")

    for t in temps:
        props = fluid_properties(fluid, concentration, t)
        table.add_row(
            f"{t:g}",
            f"{props.density_lb_ft3:.2f}",
            f"{props.viscosity_cp:.3f}",
            f"{props.specific_gravity:.3f}",
            f"{props.specific_heat_btu_lb_f:.3f}",
        )
    console.print(table)
