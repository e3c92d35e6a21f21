"""Typer command implementations exposed via ``notoize.cli``."""

from __future__ import annotations

from .cache import app as cache_app
from .resolve import resolve
from .variants import variants


__all__ = ["cache_app", "resolve", "variants"]
