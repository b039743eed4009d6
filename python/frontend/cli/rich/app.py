"""Rich terminal frontend with a coloured board and a stage banner.

Drives a ``GameSession`` on an asyncio loop.  Keys are read in a worker
thread with a short timeout so shuffles, solves, and delayed stage
changes keep running; the board is redrawn on the loop thread between
reads whenever the session reported a change.
"""

from __future__ import annotations

import asyncio
import logging

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import GameConfig
from backend.engine.gamerules import tile_for_direction
from backend.engine.gamesession import GameSession
from backend.errors import NoPathError, PuzzleError
from backend.models.grid import Grid
from backend.models.mode import GameMode, Stage
from backend.models.move import Direction
from frontend.cli.input_handler import get_key_timeout

logger = logging.getLogger(__name__)

console = Console()

_KEY_POLL = 0.1


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


# -- board rendering ----------------------------------------------------------


def _render_grid(grid: Grid, mode: GameMode) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(grid.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=False,
        box=rich.box.SQUARE,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(grid.side):
        table.add_column(width=width + 1, justify="center")

    placed = mode.stage is Stage.COMPLETED or mode.placed
    for row in range(grid.side):
        cells: list[str] = []
        for index in range(row * grid.side, (row + 1) * grid.side):
            tile = grid.tiles[index]
            if tile.is_blank:
                if placed:
                    cells.append(f"[bold magenta]{tile.id:>{width}}[/bold magenta]")
                elif mode.stage is Stage.FINAL_PIECE:
                    cells.append("[blink bold magenta]?[/blink bold magenta]")
                else:
                    cells.append("[dim]·[/dim]")
            elif grid.is_tile_correct(index):
                cells.append(f"[green]{tile.id:>{width}}[/green]")
            else:
                cells.append(f"[bold white]{tile.id:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _stage_banner(session: GameSession) -> Text:
    mode = session.mode
    if mode.stage is Stage.COMPLETED:
        return Text("★ PUZZLE COMPLETE ★  Press N for a new game", style="bold green")
    if mode.stage is Stage.FINAL_PIECE:
        if mode.placed:
            return Text("Final piece placed…", style="bold magenta")
        return Text("Press F to drop in the final piece", style="bold magenta")
    if session.machine.transition_pending:
        return Text("Solved! Get ready for the final piece…", style="bold green")
    if session.busy:
        return Text("Working…  (C to cancel)", style="bold cyan")
    return Text("Slide the tiles back into place", style="dim")


def _draw(session: GameSession, status: str) -> None:
    console.clear()
    side = session.config.side

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(session.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(session.elapsed_time), style="bold yellow")
    stats.append("    Walk: ", style="dim")
    stats.append(str(len(session.path)), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→/WASD", style="bold cyan")
    controls.append(" slide  ", style="dim")
    for key, label in (
        ("R", "shuffle"),
        ("V", "solve"),
        ("X", "jump to solved"),
        ("F", "final piece"),
        ("C", "cancel"),
        ("N", "new game"),
        ("Q", "quit"),
    ):
        controls.append(key, style="bold cyan")
        controls.append(f" {label}  ", style="dim")

    body = Group(
        Align.center(_render_grid(session.grid, session.mode)),
        Text(""),
        Align.center(_stage_banner(session)),
    )
    panel = Panel(
        body,
        title=(
            f"[bold cyan]Sliding Mosaic  {side}×{side}[/bold cyan]"
            f"[dim]  {session.config.tile_count} tiles[/dim]"
        ),
        border_style="bright_blue",
        padding=(0, 1),
    )

    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


# -- game loop ----------------------------------------------------------------


class _TerminalGame:
    def __init__(self, config: GameConfig) -> None:
        self._config = config
        self._dirty = True
        self._status = ""

    async def run(self) -> None:
        session = GameSession(self._config, on_state_changed=self._on_state_changed)
        self._watch(session.start())
        loop = asyncio.get_running_loop()

        try:
            while True:
                if self._dirty:
                    self._dirty = False
                    _draw(session, self._status)
                key = await loop.run_in_executor(None, get_key_timeout, _KEY_POLL)
                if key is None:
                    continue
                if key == "quit":
                    return
                self._status = self._dispatch(session, key)
                self._dirty = True
        finally:
            session.close()

    def _dispatch(self, session: GameSession, key: str) -> str:
        directions = {
            "up": Direction.UP,
            "down": Direction.DOWN,
            "left": Direction.LEFT,
            "right": Direction.RIGHT,
        }
        try:
            if key in directions:
                index = tile_for_direction(session.grid, directions[key])
                if index is not None:
                    session.request_move(index)
            elif key == "shuffle":
                self._watch(session.request_shuffle())
                return "[yellow]Shuffling…[/yellow]"
            elif key == "solve":
                self._watch(session.request_solve())
                return "[cyan]Retracing the shuffle…[/cyan]"
            elif key == "solve_direct":
                session.request_solve(direct=True)
            elif key == "place":
                if not session.request_place_final_piece():
                    return "[dim]Nothing to place right now.[/dim]"
            elif key == "cancel":
                session.cancel()
                return "[yellow]Stopped.[/yellow]"
            elif key == "new":
                self._watch(session.request_reset())
                return "[yellow]New game![/yellow]"
        except NoPathError:
            return "[yellow]No recorded shuffle to retrace; press X to jump to solved.[/yellow]"
        except PuzzleError as exc:
            logger.debug("Request rejected: %s", exc)
            return f"[dim]{exc}[/dim]"
        return ""

    def _watch(self, task: asyncio.Task[None] | None) -> None:
        if task is not None:
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Sequence failed", exc_info=exc)
            self._status = f"[red]{exc}[/red]"
        self._dirty = True

    def _on_state_changed(self, grid: Grid, mode: GameMode) -> None:
        self._dirty = True


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the Rich terminal game."""
    asyncio.run(_TerminalGame(config).run())
