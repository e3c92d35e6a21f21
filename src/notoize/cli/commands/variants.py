"""``notoize variants``: inspect the catalog of known family variants."""

from __future__ import annotations

import json
from typing import Annotated

from rich import box
from rich.table import Table
import typer

from notoize.scripts import ScriptClassifier, default_classifier

from .._options import JsonOption
from ..state import get_cli_state
from .resolve import script_label


def _lookup_script(classifier: ScriptClassifier, name: str) -> str:
    """Accept a script id, a configuration family name or ``generic``."""
    key = name.strip().lower()
    if key in ("generic", "lgc"):
        key = ""
    if key in classifier.scripts():
        return key
    for script in classifier.scripts():
        if classifier.family_for_script(script) == key:
            return script
    raise typer.BadParameter(f"Unknown script '{name}'.", param_hint="SCRIPT")


def variants(
    script: Annotated[
        str | None,
        typer.Argument(help="Only list the variants of this script.", show_default=False),
    ] = None,
    json_output: JsonOption = False,
) -> None:
    """List the known Noto family variants grouped by script."""
    classifier = default_classifier()
    scripts = classifier.scripts() if script is None else (_lookup_script(classifier, script),)

    if json_output:
        payload = [
            {
                "script": name,
                "family": classifier.family_for_script(name),
                "variants": list(classifier.variants_for_script(name)),
            }
            for name in scripts
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Known variants", box=box.SQUARE, header_style="bold cyan")
    table.add_column("Script", style="green")
    table.add_column("Config", style="cyan")
    table.add_column("Variants", style="magenta")
    for name in scripts:
        entry = classifier.entry(name)
        styled = {literal: style for style, literal in entry.styles.items()}
        cells = [
            f"{variant} [dim]({styled[variant]})[/dim]" if variant in styled else variant
            for variant in entry.variants
        ]
        table.add_row(script_label(name), entry.family or "-", ", ".join(cells))
    get_cli_state().console.print(table)


__all__ = ["variants"]
