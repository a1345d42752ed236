"""Full-screen timer UI and in-terminal notifications."""

from collections import deque
from dataclasses import dataclass

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from studyfocus_cli.utils.ui.formatters import format_clock, format_minutes_seconds

from .cycling import PomodoroTimer
from .session import SessionSnapshot

PAUSE_REASONS = {
    "1": "Bathroom break",
    "2": "Snack or drink",
    "3": "Phone call",
    "4": "Someone interrupted",
}


@dataclass(frozen=True)
class Toast:
    title: str
    message: str
    variant: str = "default"


class ConsoleNotifier:
    """Keeps recent notifications for the live display and rings the bell."""

    def __init__(self, console: Console | None = None, beep: bool = True, limit: int = 3):
        self.console = console or Console()
        self.beep_enabled = beep
        self.toasts: deque[Toast] = deque(maxlen=limit)

    def notify(self, title: str, message: str, variant: str = "default") -> None:
        self.toasts.append(Toast(title, message, variant))

    def beep(self) -> None:
        if self.beep_enabled:
            self.console.bell()

    def render(self) -> Text:
        """Render the most recent notifications, newest last."""
        text = Text(justify="center")
        for toast in self.toasts:
            style = "red" if toast.variant == "destructive" else "green"
            text.append(f"{toast.title}: ", style=f"bold {style}")
            text.append(f"{toast.message}\n", style=style)
        return text


class ConcentrationDisplay:
    """Builds the concentration-mode screen from a session snapshot."""

    def create_layout(
        self,
        snapshot: SessionSnapshot,
        notifier: ConsoleNotifier | None = None,
        paused_for: int = 0,
        pause_reason: str | None = None,
    ) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="toasts", size=5),
            Layout(name="footer", size=3),
        )

        if snapshot.state == "paused":
            header = Text("PAUSED", style="bold yellow", justify="center")
        else:
            header = Text("Concentrating", style="bold cyan", justify="center")
        layout["header"].update(Align.center(header, vertical="middle"))

        layout["body"].update(
            Align.center(
                self._create_body(snapshot, paused_for, pause_reason), vertical="middle"
            )
        )
        layout["toasts"].update(
            Align.center(notifier.render() if notifier else Text(""), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer(snapshot.state), vertical="middle")
        )
        return layout

    def _create_body(
        self, snapshot: SessionSnapshot, paused_for: int, pause_reason: str | None
    ) -> Group:
        color = "yellow" if snapshot.state == "paused" else "cyan"
        components = [
            Text(format_clock(snapshot.elapsed_seconds), style=f"bold {color}", justify="center"),
            Text(f"Focus Score: {snapshot.focus_score}%", style="dim", justify="center"),
            Text(""),
        ]

        counters = Table.grid(padding=(0, 4))
        counters.add_column(justify="center")
        counters.add_column(justify="center")
        counters.add_column(justify="center")
        counters.add_row(
            f"[bold]{snapshot.distraction_count}[/bold]",
            f"[bold]{format_minutes_seconds(snapshot.distraction_seconds)}[/bold]",
            f"[bold]{snapshot.pause_count}[/bold]",
        )
        counters.add_row("Tab Switches", "Time Wasted", "Pauses")
        components.append(Align.center(counters))

        if snapshot.state == "paused":
            components.append(Text(""))
            components.append(
                Text(
                    f"Paused for: {format_clock(paused_for)}",
                    style="yellow dim",
                    justify="center",
                )
            )
            reasons = "  ".join(f"{k}) {v}" for k, v in PAUSE_REASONS.items())
            components.append(Text(reasons, style="dim", justify="center"))
            if pause_reason:
                components.append(
                    Text(f"Reason: {pause_reason}", style="yellow", justify="center")
                )

        return Group(*components)

    def _create_footer(self, state: str) -> Text:
        if state == "paused":
            hints = "Press 1-4 to pick a reason  •  'r' to resume  •  's' to stop"
        else:
            hints = "Press 'p' to pause  •  's' to stop"
        return Text(hints, style="dim", justify="center")


class PomodoroDisplay:
    """Builds the Pomodoro screen from the timer state."""

    def create_layout(
        self, timer: PomodoroTimer, notifier: ConsoleNotifier | None = None
    ) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="toasts", size=4),
            Layout(name="footer", size=3),
        )

        titles = {
            "idle": ("Ready to Start", "white"),
            "work": ("Focus Time", "cyan"),
            "break": ("Break Time", "green"),
        }
        title, color = titles[timer.phase]
        layout["header"].update(
            Align.center(Text(title, style=f"bold {color}", justify="center"), vertical="middle")
        )

        bar_width = 40
        filled = int(bar_width * timer.progress / 100)
        progress = Text(justify="center")
        progress.append("█" * filled + "░" * (bar_width - filled), style=color)
        progress.append(f"  {int(timer.progress)}%", style="dim")

        body = Group(
            Text(format_clock(timer.time_left), style=f"bold {color}", justify="center"),
            Text(""),
            progress,
            Text(""),
            Text(f"Completed cycles: {timer.completed_cycles}", justify="center"),
        )
        layout["body"].update(Align.center(body, vertical="middle"))
        layout["toasts"].update(
            Align.center(notifier.render() if notifier else Text(""), vertical="middle")
        )

        if timer.is_running:
            hints = "Press 'p' to pause  •  'x' to reset  •  'q' to quit"
        else:
            hints = "Press 'space' to start  •  'x' to reset  •  'q' to quit"
        layout["footer"].update(
            Align.center(Text(hints, style="dim", justify="center"), vertical="middle")
        )
        return layout


def show_session_summary(snapshot: SessionSnapshot, console: Console | None = None) -> None:
    """Print the final counters of a stopped session."""
    console = console or Console()

    pauses = "\n".join(
        f"  - {entry.reason}: {format_minutes_seconds(entry.duration_seconds)}"
        for entry in snapshot.pause_log
    )

    panel = Panel(
        f"""[bold green]Session Complete![/bold green]

Elapsed: {format_clock(snapshot.elapsed_seconds)}
Focused: {format_clock(snapshot.focused_seconds)} ({snapshot.focus_score}%)
Tab switches: {snapshot.distraction_count} ({format_minutes_seconds(snapshot.distraction_seconds)} lost)
Pauses: {snapshot.pause_count} ({format_minutes_seconds(snapshot.pause_seconds)})"""
        + (f"\n{pauses}" if pauses else ""),
        border_style="green",
        padding=(1, 2),
    )

    console.print(panel)
