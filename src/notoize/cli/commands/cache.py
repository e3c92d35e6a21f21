"""``notoize cache``: manage the on-disk cache."""

from __future__ import annotations

from typing import Annotated

import typer

from notoize.cache import FontCache

from ..state import get_cli_state


app = typer.Typer(help="Manage cached block documents and font files.")


@app.command("clear")
def clear(
    all_entries: Annotated[
        bool,
        typer.Option("--all", help="Remove downloaded fonts as well as block documents."),
    ] = False,
) -> None:
    """Remove cached block documents (and fonts with --all)."""
    cache = FontCache()
    removed = cache.clear(None if all_entries else ["overview"])
    console = get_cli_state().console
    if not removed:
        console.print(f"Nothing to clear under {cache.root}")
        return
    for path in removed:
        console.print(f"Removed {path}")


__all__ = ["app", "clear"]
