"""Script classification over the closed catalog of Noto family variants.

The catalog lives in ``notoize/data/variants.yaml`` rather than in code so it
can grow without touching the resolver. It is validated when loaded: every
literal must be unique, every configuration family must exist and each of its
styles must map to exactly one literal.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from typing import Any

import yaml

from notoize.config import family_names, family_styles
from notoize.exceptions import CatalogDataError, UnknownVariantError


NEUTRAL_SCRIPT = ""
_DATA_PACKAGE = "notoize.data"
_TABLE_NAME = "variants.yaml"
_UI_MARKERS = ("UI", "Display")


def is_ui_variant(name: str) -> bool:
    """Return True for UI or Display cuts such as ``Sans Arabic UI``."""
    return any(token in _UI_MARKERS for token in name.split())


def ui_siblings(name: str) -> tuple[str, ...]:
    """Return the UI/Display literals that may stand in for ``name``."""
    return tuple(f"{name} {marker}" for marker in _UI_MARKERS)


@dataclass(frozen=True, slots=True)
class ScriptEntry:
    """One script of the catalog and the variants addressing it."""

    script: str
    family: str | None
    variants: tuple[str, ...]
    styles: Mapping[str, str] = field(default_factory=dict)


def _parse_variant(raw: Any, script: str) -> tuple[str, str | None]:
    if isinstance(raw, str):
        return raw, None
    if isinstance(raw, Mapping) and isinstance(raw.get("name"), str):
        style = raw.get("style")
        return raw["name"], str(style) if style is not None else None
    raise CatalogDataError(f"Invalid variant entry {raw!r} for script '{script}'.")


def _parse_entries(payload: Any) -> list[ScriptEntry]:
    if not isinstance(payload, list):
        raise CatalogDataError("The variant table must be a list of script entries.")
    known_families = set(family_names())
    entries: list[ScriptEntry] = []
    for raw in payload:
        if not isinstance(raw, Mapping) or "script" not in raw:
            raise CatalogDataError(f"Invalid script entry: {raw!r}")
        script = str(raw["script"] or "")
        family = raw.get("family")
        if family is not None and family not in known_families:
            raise CatalogDataError(f"Script '{script}' references unknown family '{family}'.")
        variants: list[str] = []
        styles: dict[str, str] = {}
        for item in raw.get("variants") or ():
            name, style = _parse_variant(item, script)
            variants.append(name)
            if style is None:
                continue
            if family is None:
                raise CatalogDataError(f"Variant '{name}' has a style but '{script}' has no family.")
            if style not in family_styles(family):
                raise CatalogDataError(f"Style '{style}' is not valid for family '{family}'.")
            if style in styles:
                raise CatalogDataError(f"Style '{style}' is mapped twice in '{script}'.")
            styles[style] = name
        if not variants:
            raise CatalogDataError(f"Script '{script}' declares no variants.")
        entries.append(
            ScriptEntry(script=script, family=family, variants=tuple(variants), styles=styles)
        )
    return entries


class ScriptClassifier:
    """Map variant literals to canonical scripts.

    ``classify`` is total over the catalog and raises ``UnknownVariantError`` for
    anything else. Script order follows the table declaration order.
    """

    def __init__(self, entries: Iterable[ScriptEntry]) -> None:
        self._entries: dict[str, ScriptEntry] = {}
        self._by_variant: dict[str, str] = {}
        self._by_family: dict[str, ScriptEntry] = {}
        for entry in entries:
            if entry.script in self._entries:
                raise CatalogDataError(f"Script '{entry.script}' is declared twice.")
            self._entries[entry.script] = entry
            for name in entry.variants:
                if name in self._by_variant:
                    raise CatalogDataError(f"Variant '{name}' is declared twice.")
                self._by_variant[name] = entry.script
            if entry.family is not None:
                if entry.family in self._by_family:
                    raise CatalogDataError(f"Family '{entry.family}' governs two scripts.")
                self._by_family[entry.family] = entry
        self._order = {script: idx for idx, script in enumerate(self._entries)}
        self._check_families()

    def _check_families(self) -> None:
        for family in family_names():
            entry = self._by_family.get(family)
            if entry is None:
                raise CatalogDataError(f"No script is governed by family '{family}'.")
            missing = [style for style in family_styles(family) if style not in entry.styles]
            if missing:
                raise CatalogDataError(
                    f"Family '{family}' has no variant for styles: {', '.join(missing)}."
                )

    @classmethod
    def from_payload(cls, payload: Any) -> ScriptClassifier:
        return cls(_parse_entries(payload))

    @classmethod
    def load_default(cls) -> ScriptClassifier:
        """Load the packaged variant table."""
        text = resources.files(_DATA_PACKAGE).joinpath(_TABLE_NAME).read_text(encoding="utf-8")
        return cls.from_payload(yaml.safe_load(text))

    def classify(self, variant: str) -> str:
        try:
            return self._by_variant[variant]
        except KeyError:
            raise UnknownVariantError(variant) from None

    def is_known(self, variant: str) -> bool:
        return variant in self._by_variant

    def validate(self, variants: Iterable[str], *, block_id: int | None = None) -> None:
        """Raise on the first literal absent from the catalog."""
        for variant in variants:
            if variant not in self._by_variant:
                raise UnknownVariantError(variant, block_id=block_id)

    def all_known_variants(self) -> tuple[str, ...]:
        return tuple(self._by_variant)

    def scripts(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def entry(self, script: str) -> ScriptEntry:
        return self._entries[script]

    def variants_for_script(self, script: str) -> tuple[str, ...]:
        entry = self._entries.get(script)
        return entry.variants if entry else ()

    def family_for_script(self, script: str) -> str | None:
        entry = self._entries.get(script)
        return entry.family if entry else None

    def style_literal(self, script: str, style: str) -> str | None:
        entry = self._entries.get(script)
        if entry is None:
            return None
        return entry.styles.get(style)

    def order(self, script: str) -> int:
        return self._order.get(script, len(self._order))

    def group(self, variants: Sequence[str]) -> dict[str, list[str]]:
        """Group variants by script, scripts in declaration order."""
        grouped: dict[str, list[str]] = {}
        for variant in variants:
            grouped.setdefault(self.classify(variant), []).append(variant)
        return dict(sorted(grouped.items(), key=lambda item: self.order(item[0])))


@lru_cache(maxsize=1)
def default_classifier() -> ScriptClassifier:
    """Return the shared classifier built from the packaged table."""
    return ScriptClassifier.load_default()


__all__ = [
    "NEUTRAL_SCRIPT",
    "ScriptClassifier",
    "ScriptEntry",
    "default_classifier",
    "is_ui_variant",
    "ui_siblings",
]
