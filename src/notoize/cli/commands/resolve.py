"""``notoize resolve``: print the font stack covering some text."""

from __future__ import annotations

import json
from pathlib import Path

from rich import box
from rich.table import Table
import typer

from notoize.cache import FontCache
from notoize.client import NotoizeClient
from notoize.config import StyleConfiguration, load_style_config
from notoize.downloader import NotoFontDownloader
from notoize.exceptions import NotoizeError
from notoize.logging import FontPipelineLogger
from notoize.scripts import NEUTRAL_SCRIPT
from notoize.sources import source_for
from notoize.stack import FontStack

from .._options import (
    ConfigOption,
    DebugOption,
    DownloadOption,
    FilesOption,
    FontExtOption,
    JsonOption,
    NoCacheOption,
    PreferCjkOption,
    PreferMathOption,
    PreferUiOption,
    SerifOption,
    SourceOption,
    TextArgument,
    VerboseOption,
)
from ..state import emit_error, emit_warning, get_cli_state, set_cli_state


def build_style(
    config: Path | None,
    *,
    serif: bool = False,
    prefer_ui: bool = False,
    prefer_math: bool = False,
    prefer_cjk: bool = False,
) -> StyleConfiguration:
    """Combine the optional YAML file, the preset switch and the tie-break flags."""
    if config is not None:
        style = load_style_config(config)
    elif serif:
        style = StyleConfiguration.prefer_serif()
    else:
        style = StyleConfiguration.new_sans()
    flags = {
        name: True
        for name, enabled in (
            ("prefer_ui", prefer_ui),
            ("prefer_math", prefer_math),
            ("prefer_cjk", prefer_cjk),
        )
        if enabled
    }
    return style.with_overrides(**flags) if flags else style


def script_label(script: str) -> str:
    return "(generic)" if script == NEUTRAL_SCRIPT else script


def _print_tables(
    stack: FontStack, client: NotoizeClient, style: StyleConfiguration, files: bool
) -> None:
    console = get_cli_state().console
    table = Table(title="Font stack", box=box.SQUARE, header_style="bold cyan")
    table.add_column("Family", style="magenta")
    table.add_column("Script", style="green")
    if files:
        table.add_column("File")
    by_family = {font.family: font for font in stack.files(style.font_ext)}
    for name in stack.names:
        row = [name, script_label(client.classifier.classify(name))]
        if files:
            row.append(by_family[name].filename)
        table.add_row(*row)
    if not stack.names:
        table.add_row("-", "-", *(["-"] if files else []))
    console.print(table)

    conflicts = stack.conflicts(client.classifier)
    if conflicts:
        report = Table(title="Cross-script conflicts", box=box.SQUARE, header_style="bold yellow")
        report.add_column("Code point")
        report.add_column("Variants")
        report.add_column("Scripts")
        for entry in conflicts:
            payload = entry.to_payload()
            scripts = [script_label(script) for script in payload["scripts"]]
            report.add_row(payload["codepoint"], ", ".join(payload["variants"]), ", ".join(scripts))
        console.print(report)


def resolve(
    text: TextArgument,
    config: ConfigOption = None,
    serif: SerifOption = False,
    prefer_ui: PreferUiOption = False,
    prefer_math: PreferMathOption = False,
    prefer_cjk: PreferCjkOption = False,
    font_ext: FontExtOption = None,
    json_output: JsonOption = False,
    files: FilesOption = False,
    download: DownloadOption = False,
    source: SourceOption = None,
    no_cache: NoCacheOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
) -> None:
    """Resolve the Noto families needed to render TEXT."""
    set_cli_state(verbosity=verbose, debug=debug)
    logger = FontPipelineLogger(verbose=verbose > 0, quiet=json_output)
    cache = FontCache()

    try:
        style = build_style(
            config,
            serif=serif,
            prefer_ui=prefer_ui,
            prefer_math=prefer_math,
            prefer_cjk=prefer_cjk,
        )
        if font_ext is not None:
            style = style.with_overrides(font_ext=font_ext)
        client = NotoizeClient(
            source_for(source, cache=cache, use_cache=not no_cache),
            cache=cache,
            logger=logger,
        )
        logger.debug("Style preferences: %s", " ".join(style.to_string_list()))
        stack = client.notoize(" ".join(text), style)
    except NotoizeError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    downloaded: dict[str, Path] = {}
    if download:
        downloader = NotoFontDownloader(cache=cache, logger=logger)
        downloaded = downloader.ensure(stack.files(style.font_ext))

    if json_output:
        payload = stack.to_payload(client.classifier)
        payload["missing_variants"] = stack.missing_variants(client.classifier)
        if verbose:
            payload["style"] = style.to_string_list()
        if files:
            payload["files"] = [
                {"family": font.family, "filename": font.filename, "url": font.url}
                for font in stack.files(style.font_ext)
            ]
        if download:
            payload["downloaded"] = {family: str(path) for family, path in downloaded.items()}
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    _print_tables(stack, client, style, files)
    for issue in stack.issues:
        emit_warning(issue.message())
    for family, path in downloaded.items():
        logger.info("%s: %s", family, path)


__all__ = ["build_style", "resolve", "script_label"]
