#!/usr/bin/env python3
"""Sliding Mosaic.

Usage::

    sliding-mosaic                    # 16×16 board, 500-move shuffle
    sliding-mosaic -s 4 -m 40         # small board, short shuffle
    sliding-mosaic --log-file run.log --log-level debug
"""

import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from backend.config import GameConfig


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


def _configure_logging(level: LogLevel, log_file: Path | None) -> None:
    # --log-file keeps log lines off the full-screen board.
    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    side: int = typer.Option(
        16, "-s", "--side",
        min=2, max=32,
        help="Grid side length.",
    ),
    moves: int = typer.Option(
        500, "-m", "--moves",
        min=0,
        help="Number of random moves in a shuffle.",
    ),
    step_delay: float = typer.Option(
        0.01, "--step-delay",
        min=0.0,
        help="Seconds to pause between animation frames.",
    ),
    steps_per_frame: int = typer.Option(
        20, "--steps-per-frame",
        min=1,
        help="Moves applied between two animation frames.",
    ),
    final_delay: float = typer.Option(
        1.0, "--final-delay",
        min=0.0,
        help="Seconds between solving and the final-piece stage.",
    ),
    completion_delay: float = typer.Option(
        1.0, "--completion-delay",
        min=0.0,
        help="Seconds between placing the final piece and completion.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for reproducible shuffles.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        case_sensitive=False,
        help="Logging verbosity.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        dir_okay=False,
        help="Write logs to this file instead of the terminal.",
    ),
) -> None:
    """Sliding Mosaic: shuffle the board, then put it back together."""
    _configure_logging(log_level, log_file)
    config = GameConfig(
        side=side,
        shuffle_moves=moves,
        step_delay=step_delay,
        steps_per_frame=steps_per_frame,
        final_piece_delay=final_delay,
        completion_delay=completion_delay,
        seed=seed,
    )

    from frontend.cli.rich.app import run

    run(config)


if __name__ == "__main__":
    app()
