from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from focusquest.application.services.chest_service import chest_quality_name
from focusquest.application.services.event_effect_applier import effect_summary
from focusquest.domain.models.event import EventSeverity
from focusquest.domain.models.task_types import RiskLevel, TaskOutcome, TaskType

_CONSOLE = Console()
_SEVERITY_STYLES = {
    EventSeverity.FLAVOR: "dim",
    EventSeverity.INFO: "cyan",
    EventSeverity.WARNING: "yellow",
    EventSeverity.CRITICAL: "bold red",
}
_OUTCOME_STYLES = {
    TaskOutcome.SUCCESS: "green",
    TaskOutcome.PARTIAL: "yellow",
    TaskOutcome.FAILURE: "red",
}
_TICK_MS = 5_000


class VirtualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)

    def __call__(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        self._now += float(delta_ms)
        return self._now


def _format_minutes(ms: float) -> str:
    seconds = int(ms // 1000)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def render_task_table(session) -> None:
    table = Table(title="Available tasks", title_style="bold yellow")
    table.add_column("Task", style="bold")
    for risk in RiskLevel:
        table.add_column(risk.value.title(), justify="right")
    for task_type in session.available_tasks():
        chances = session.preview(task_type)
        table.add_row(task_type.value.title(), *(f"{chances[risk]:.0f}%" for risk in RiskLevel))
    _CONSOLE.print(table)


def render_tick(tick, clock_ms: float) -> None:
    stamp = f"[dim]{_format_minutes(clock_ms)}[/dim]"
    for milestone in tick.milestones:
        _CONSOLE.print(f"{stamp} [bold cyan]Milestone:[/bold cyan] {milestone.message}")
    if tick.event is not None:
        style = _SEVERITY_STYLES.get(tick.event.severity, "white")
        line = f"{stamp} [{style}]{tick.event.message}[/{style}]"
        if tick.effect_result is not None and tick.effect_result.applied_effects:
            line += f" [dim]({effect_summary(tick.effect_result)})[/dim]"
        _CONSOLE.print(line)


def render_outcome(outcome) -> None:
    result = outcome.result
    style = _OUTCOME_STYLES.get(result.outcome, "white")
    body = Table.grid(padding=(0, 1))
    body.add_column(style="bold yellow", justify="right")
    body.add_column(style="white")
    body.add_row("Outcome", f"[{style}]{result.outcome.value.title()}[/{style}]")
    body.add_row("Final chance", f"{result.final_success_chance:.0f}%")
    body.add_row("Gold", str(outcome.applied.gold))
    body.add_row("XP", str(outcome.applied.xp))
    body.add_row("Materials", str(outcome.applied.materials))
    body.add_row("Chests", str(len(outcome.applied.chests)))
    body.add_row("Events", f"{outcome.statistics.total} ({outcome.statistics.beneficial_events} good, {outcome.statistics.harmful_events} bad)")
    if outcome.flavor:
        body.add_row("", f"[italic]{outcome.flavor}[/italic]")
    for warning in outcome.warnings:
        body.add_row("Warning", f"[red]{warning}[/red]")
    _CONSOLE.print(Panel.fit(body, title=f"[bold yellow]{result.summary}[/bold yellow]", border_style=style))


def render_chest_results(results) -> None:
    if not results:
        _CONSOLE.print("[dim]No chests to open.[/dim]")
        return
    table = Table(title="Chest loot", title_style="bold yellow")
    table.add_column("Chest")
    table.add_column("Items")
    table.add_column("Gold", justify="right")
    table.add_column("Value", justify="right")
    for result in results:
        name = chest_quality_name(result.chest.quality)
        if result.was_lucky:
            name += " [bold magenta](lucky!)[/bold magenta]"
        items = "\n".join(f"{item.name} [dim]({item.rarity.value})[/dim]" for item in result.items) or "-"
        table.add_row(name, items, str(result.gold), str(result.total_value))
    _CONSOLE.print(table)


def run_demo(
    session,
    clock: VirtualClock,
    task_type: TaskType | str = TaskType.EXPEDITION,
    risk_level: RiskLevel | str = RiskLevel.STANDARD,
    duration_ms: float = 25 * 60 * 1000,
) -> None:
    """Play one focus session on a virtual clock and render it."""
    render_task_table(session)
    opening = session.start_task(task_type, risk_level, duration_ms)
    task = session.active_task
    _CONSOLE.print(
        Panel.fit(
            opening or "The task begins.",
            title=f"[bold yellow]{task.config.name} ({task.risk_level.value})[/bold yellow]",
            subtitle=f"[dim]{task.calculated_success_chance:.0f}% success chance[/dim]",
            subtitle_align="left",
            border_style="yellow",
        )
    )

    while True:
        tick = session.tick()
        render_tick(tick, clock())
        if tick.finished:
            break
        clock.advance(_TICK_MS)

    outcome = session.finish()
    if outcome is None:
        return
    render_outcome(outcome)
    render_chest_results(session.open_all_chests())
    _CONSOLE.print(f"[dim]Gold {session.inventory.gold} | XP {session.character.experience} | HP {session.character.current_hp}/{session.character.max_hp}[/dim]")
