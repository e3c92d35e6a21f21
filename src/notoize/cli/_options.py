"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from notoize.config import FontExt


STYLE_PANEL = "Style"
DATA_PANEL = "Data"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

TextArgument = Annotated[
    list[str],
    typer.Argument(
        metavar="TEXT...",
        help="Text to cover. Several arguments are joined with a single space.",
        show_default=False,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML style configuration (a mapping of preference lists, optionally with 'preset').",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=STYLE_PANEL,
    ),
]

SerifOption = Annotated[
    bool,
    typer.Option(
        "--serif",
        help="Start from the serif preset instead of the sans one.",
        rich_help_panel=STYLE_PANEL,
    ),
]

PreferUiOption = Annotated[
    bool,
    typer.Option(
        "--prefer-ui",
        help="Use UI/Display cuts when they cover a code point.",
        rich_help_panel=STYLE_PANEL,
    ),
]

PreferMathOption = Annotated[
    bool,
    typer.Option(
        "--prefer-math",
        help="Pick Sans Math over Sans Symbols when both cover a code point.",
        rich_help_panel=STYLE_PANEL,
    ),
]

PreferCjkOption = Annotated[
    bool,
    typer.Option(
        "--prefer-cjk",
        help="Pick CJK fonts over the generic styles for shared code points.",
        rich_help_panel=STYLE_PANEL,
    ),
]

FontExtOption = Annotated[
    FontExt | None,
    typer.Option(
        "--ext",
        help="Font file extension used with --files and --download.",
        case_sensitive=False,
        show_default=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

SourceOption = Annotated[
    str | None,
    typer.Option(
        "--source",
        help="Overview data location: an http(s) base URL or a local mirror directory.",
        show_default=False,
        rich_help_panel=DATA_PANEL,
    ),
]

NoCacheOption = Annotated[
    bool,
    typer.Option(
        "--no-cache",
        help="Do not read or write cached block documents.",
        rich_help_panel=DATA_PANEL,
    ),
]

JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Print a JSON document instead of tables.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

FilesOption = Annotated[
    bool,
    typer.Option(
        "--files",
        help="List the font file of every selected family.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

DownloadOption = Annotated[
    bool,
    typer.Option(
        "--download",
        help="Download the selected font files into the cache.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
