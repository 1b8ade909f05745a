"""Rich rendering of engine positions."""

from typing import Iterable, Optional, Union

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.core.constants import INFINITE_HEALTH_FACTOR, from_wad
from src.core.models import HealthStatus, PositionSnapshot
from src.engine.dsc_engine import DSCEngine

STATUS_STYLES = {
    HealthStatus.HEALTHY: "green",
    HealthStatus.UNDERWATER: "bold red",
}


def format_health_factor(health_factor: Union[int, float]) -> Text:
    """Health factor as coloured text; infinity for debt-free positions."""
    if health_factor == INFINITE_HEALTH_FACTOR:
        return Text("∞", style="dim green")

    status = HealthStatus.from_health_factor(health_factor)
    return Text(f"{from_wad(health_factor):.4f}", style=STATUS_STYLES[status])


def format_usd(value: int) -> str:
    return f"${from_wad(value):,.2f}"


def build_positions_table(positions: Iterable[PositionSnapshot]) -> Table:
    """One row per position: collateral, value, debt, health factor, status."""
    table = Table(
        show_header=True,
        header_style="bold orange1",
        border_style="dim",
        expand=True,
        padding=(0, 1),
    )
    table.add_column("User", style="cyan")
    table.add_column("Collateral")
    table.add_column("Value", justify="right")
    table.add_column("Debt", justify="right")
    table.add_column("HF", justify="right")
    table.add_column("Status", justify="center")

    for position in positions:
        collateral = ", ".join(
            f"{from_wad(amount):,.4f} {token}" for token, amount in position.collateral.items()
        )
        status = position.status
        table.add_row(
            position.user,
            collateral or "-",
            format_usd(position.collateral_value),
            format_usd(position.debt),
            format_health_factor(position.health_factor),
            Text(status.value, style=STATUS_STYLES[status]),
        )

    return table


def build_report(engine: DSCEngine) -> Panel:
    """Panel with system totals and the positions table."""
    positions = engine.positions()
    underwater = sum(1 for p in positions if p.is_liquidatable)

    header = Text()
    header.append("Positions: ", style="dim")
    header.append(f"{len(positions)}", style="cyan")
    header.append("  Underwater: ", style="dim")
    header.append(f"{underwater}", style="red" if underwater else "green")
    header.append("  Total debt: ", style="dim")
    header.append(f"{format_usd(engine.total_debt())}\n", style="yellow")

    table = Table.grid(expand=True)
    table.add_row(header)
    table.add_row(build_positions_table(positions))

    return Panel(
        table,
        title="[bold orange1]DSC Engine[/]",
        border_style="dim",
    )


def print_report(engine: DSCEngine, console: Optional[Console] = None) -> None:
    """Print the engine report to ``console`` (default: stdout)."""
    (console or Console()).print(build_report(engine))
