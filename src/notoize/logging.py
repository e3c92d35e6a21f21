"""Small logging helpers that integrate with the notoize CLI."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import logging
from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
import typer


_LOGGER = logging.getLogger("notoize")


def _resolve_state() -> object | None:
    from notoize.cli.state import get_cli_state

    try:
        return get_cli_state(create=False)
    except RuntimeError:
        return None


@dataclass(slots=True)
class FontPipelineLogger:
    """Light wrapper around the CLI state with graceful degradation.

    Outside the CLI, info and warnings go through ``typer.echo`` and debug
    messages are forwarded to the ``notoize`` stdlib logger.
    """

    verbose: bool = False
    quiet: bool = False
    _state: object | None = None

    def __post_init__(self) -> None:
        self._state = _resolve_state()

    def _render_message(self, message: str, args: tuple[Any, ...]) -> str:
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *(str(arg) for arg in args)])
        return message

    def info(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        _LOGGER.info(message)
        if self.quiet:
            return
        if self._state is not None:
            self._state.console.log(message)
            return
        typer.echo(message, err=True)

    def warning(self, message: str, *args: Any) -> None:
        message = self._render_message(message, args)
        if self._state is not None:
            from notoize.cli.state import emit_warning

            emit_warning(message)
            return
        typer.secho(message, fg="yellow", err=True)

    def debug(self, message: str, *args: Any) -> None:
        """Emit a debug message; echoed only in verbose mode."""
        if not self.verbose:
            _LOGGER.debug(self._render_message(message, args))
            return
        self.info(message, *args)

    @contextmanager
    def progress(self, task: str, total: int | None = None) -> Iterator[Callable[[int], None]]:
        """Yield a progress updater backed by a Rich progress bar."""
        if self.quiet:

            def _noop(step: int = 1) -> None:
                return

            yield _noop
            return

        console = self._state.console if self._state is not None else Console(stderr=True)
        with Progress(
            SpinnerColumn(),
            TextColumn(f"[bold cyan]{task}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}" if total else "{task.completed}"),
            TimeElapsedColumn(),
            console=console,
            transient=not self.verbose,
        ) as progress:
            task_id: TaskID = progress.add_task(task, total=total)

            def _advance(step: int = 1) -> None:
                progress.update(task_id, advance=step)

            yield _advance


__all__ = ["FontPipelineLogger"]
