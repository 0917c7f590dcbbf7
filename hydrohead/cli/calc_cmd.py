"""CLI command for running the pump-head calculation on a system file."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from hydrohead.core.config import SystemFileError, load_system_json, save_result_json
from hydrohead.core.fittings import UnknownFittingError
from hydrohead.core.fluids import FluidPropertyError, fluid_display_name
from hydrohead.core.hydraulics import COLEBROOK, SWAMEE_JAIN
from hydrohead.core.pump_head import HydronicInputError, calculate, head_to_psi, pump_bhp
from hydrohead.core.pipes import PipeDataError
from hydrohead.utils.constants import DEFAULT_PUMP_EFFICIENCY
from hydrohead.utils.units import display, temperature_to_f
from hydrohead.utils.validation import Severity

_SEVERITY_STYLE = {
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


@click.command("calc")
@click.argument("path", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file (JSON).")
@click.option(
    "--units",
    type=click.Choice(["us", "si"], case_sensitive=False),
    default="us",
    show_default=True,
    help="Display unit system.",
)
@click.option(
    "--efficiency",
    type=click.FloatRange(0.0, 1.0, min_open=True),
    default=DEFAULT_PUMP_EFFICIENCY,
    show_default=True,
    help="Pump efficiency used for brake horsepower.",
)
@click.option("--colebrook", is_flag=True, help="Use Colebrook-White instead of Swamee-Jain.")
@click.option("--temp", type=float, default=None, help="Override the fluid temperature.")
@click.option(
    "--temp-unit",
    type=click.Choice(["degF", "degC"]),
    default="degF",
    show_default=True,
    help="Unit of --temp.",
)
@click.pass_context
def calc(
    ctx: click.Context,
    path: str,
    output: str | None,
    units: str,
    efficiency: float,
    colebrook: bool,
    temp: float | None,
    temp_unit: str,
) -> None:
    """Calculate pump head for the system described in PATH (JSON)."""
    console: Console = ctx.obj.get("console", Console())
    units = units.lower()

    try:
        system = load_system_json(path)
        if temp is not None:
            system.fluid_temp_f = temperature_to_f(temp, temp_unit)
        result = calculate(system, friction_method=COLEBROOK if colebrook else SWAMEE_JAIN)
    except HydronicInputError as e:
        console.print("[red]Error:[/red] Invalid system input.")
        for msg in e.validation.errors:
            console.print(f"  [red]•[/red] {msg.message}")
        raise SystemExit(1)
    except (SystemFileError, PipeDataError, UnknownFittingError, FluidPropertyError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    sg = result.fluid.specific_gravity
    fluid_label = fluid_display_name(system.fluid_type)
    if system.fluid_type.is_glycol:
        fluid_label += f" {system.glycol_concentration:g}%"

    console.print(f"\n[bold]hydrohead: {system.name}[/bold]")
    console.print(
        f"{system.loop_type.value.capitalize()} loop, {fluid_label} at {system.fluid_temp_f:g}°F"
    )
    console.print()

    # Sections
    table = Table(title="Sections")
    table.add_column("Section", style="cyan")
    table.add_column("Pipe")
    _, flow_unit = display(0.0, "flow", units)
    _, vel_unit = display(0.0, "velocity", units)
    _, head_unit = display(0.0, "head", units)
    table.add_column(f"Flow ({flow_unit})", justify="right")
    table.add_column(f"V ({vel_unit})", justify="right")
    table.add_column("Re", justify="right")
    table.add_column("f", justify="right")
    table.add_column(f"Pipe ({head_unit})", justify="right")
    table.add_column(f"Fittings ({head_unit})", justify="right")
    table.add_column(f"Total ({head_unit})", justify="right", style="green")

    for s in result.sections:
        table.add_row(
            s.section_name,
            f"{s.pipe_size}\" {s.pipe_material}",
            f"{display(s.flow_gpm, 'flow', units)[0]:.1f}",
            f"{display(s.velocity_fps, 'velocity', units)[0]:.2f}",
            f"{s.reynolds_number:,.0f}",
            f"{s.friction_factor:.4f}",
            f"{display(s.pipe_friction_loss_ft, 'head', units)[0]:.2f}",
            f"{display(s.fittings_loss_ft, 'head', units)[0]:.2f}",
            f"{display(s.total_section_loss_ft, 'head', units)[0]:.2f}",
        )
    console.print(table)

    # Summary
    summary = Table(title="Pump Head")
    summary.add_column("Parameter", style="cyan")
    summary.add_column("Value", style="green", justify="right")
    summary.add_column("Unit", style="dim")

    def head_row(label: str, value_ft: float) -> None:
        value, unit = display(value_ft, "head", units)
        summary.add_row(label, f"{value:.2f}", unit)

    head_row("Pipe Friction", result.total_pipe_friction_ft)
    head_row("Fittings & Devices", result.total_fittings_loss_ft)
    head_row("Static Head", result.static_head_ft)
    head_row("Calculated Head", result.calculated_head_ft)
    head_row(f"Safety Factor ({result.safety_factor_percent:.0f}%)", result.safety_factor_ft)
    head_row("Total Pump Head", result.total_pump_head_ft)
    psi, p_unit = display(head_to_psi(result.total_pump_head_ft, sg), "pressure", units)
    summary.add_row("Total Pump Pressure", f"{psi:.2f}", p_unit)
    flow, f_unit = display(result.max_flow_gpm, "flow", units)
    summary.add_row("Design Flow", f"{flow:.1f}", f_unit)
    vol, v_unit = display(result.total_system_volume_gal, "volume", units)
    summary.add_row("System Volume", f"{vol:.1f}", v_unit)
    power, w_unit = display(
        pump_bhp(result.max_flow_gpm, result.total_pump_head_ft, sg, efficiency), "power", units
    )
    summary.add_row(f"Brake Power (η = {efficiency:.0%})", f"{power:.2f}", w_unit)
    summary.add_row("Friction Rate", f"{result.friction_rate_ft_per_100ft:.2f}", "ft/100 ft")
    console.print(summary)

    if result.warnings.messages:
        console.print("\n[bold]Design Checks[/bold]")
        for msg in result.warnings.messages:
            style = _SEVERITY_STYLE[msg.severity]
            console.print(f"  [{style}]{msg.severity.value}[/{style}] {msg.message}")

    if output:
        save_result_json(result, output)
        console.print(f"\n[dim]Saved to {output}[/dim]")
