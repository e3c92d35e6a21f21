"""Minimal Noto font stacks for arbitrary text.

Architecture
: `BlockIndex` maps code points to Unicode blocks; `FontSupportCatalog` fetches
  the per-block support documents through a source (`NotofontsSource`,
  `DirectorySource`, optionally wrapped in `CachedSource`) and keeps them for
  the lifetime of a client.
: `ScriptClassifier` groups the closed catalog of variant names by script from
  the packaged ``variants.yaml`` table.
: `Resolver` picks, for each code point, the variants a `StyleConfiguration`
  asks for. `NotoizeClient` runs it over a whole string and `assemble` folds
  the selections into a `FontStack` with its diagnostics.

Goal
: Ask for as few font families as possible while honouring per-script style
  preferences, and explain every code point that could not be honoured.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from notoize.blocks import BlockDescriptor, BlockIndex
from notoize.cache import FontCache
from notoize.catalog import FontSupportCatalog
from notoize.client import NotoizeClient, codepoints, resolve
from notoize.config import (
    FontExt,
    StyleConfiguration,
    load_style_config,
    parse_style_config,
)
from notoize.diagnostics import (
    ScriptConflict,
    UnsatisfiablePreference,
    UnsupportedCodePoint,
    conflicts,
    missing_variants,
)
from notoize.downloader import NotoFontDownloader
from notoize.exceptions import (
    BlockIndexError,
    CatalogDataError,
    ConfigurationError,
    DataSourceError,
    NotoizeError,
    UnknownVariantError,
)
from notoize.resolver import Resolver, Selection
from notoize.scripts import ScriptClassifier, default_classifier, is_ui_variant
from notoize.sources import CachedSource, DirectorySource, MemorySource, NotofontsSource
from notoize.stack import FontFile, FontStack, assemble


try:
    __version__ = _pkg_version("notoize")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BlockDescriptor",
    "BlockIndex",
    "BlockIndexError",
    "CachedSource",
    "CatalogDataError",
    "ConfigurationError",
    "DataSourceError",
    "DirectorySource",
    "FontCache",
    "FontExt",
    "FontFile",
    "FontStack",
    "FontSupportCatalog",
    "MemorySource",
    "NotoFontDownloader",
    "NotoizeClient",
    "NotoizeError",
    "NotofontsSource",
    "Resolver",
    "ScriptClassifier",
    "ScriptConflict",
    "Selection",
    "StyleConfiguration",
    "UnknownVariantError",
    "UnsatisfiablePreference",
    "UnsupportedCodePoint",
    "__version__",
    "assemble",
    "codepoints",
    "conflicts",
    "default_classifier",
    "is_ui_variant",
    "load_style_config",
    "missing_variants",
    "parse_style_config",
    "resolve",
]
