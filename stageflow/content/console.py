"""Dispatcher that echoes stages to the terminal."""

from __future__ import annotations

from typing import List, Optional

import typer

from .inmemory import InMemoryContentDispatcher


class ConsoleContentDispatcher(InMemoryContentDispatcher):
    """Prints each activated stage; output is fed back by the caller."""

    def activate(self, stage_name: str, arguments: Optional[List[str]] = None) -> None:
        super().activate(stage_name, arguments)
        header = typer.style(f"[{stage_name}]", bold=True)
        if arguments:
            typer.echo(f"{header} {', '.join(arguments)}")
        else:
            typer.echo(header)

    def deactivate(self) -> None:
        super().deactivate()
        typer.echo("(display cleared)")
