"""Style configuration: per-script preference lists and global tie-breaks."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, ValidationError
import yaml

from notoize.exceptions import ConfigurationError


class FontExt(str, Enum):
    TTF = "ttf"
    OTF = "otf"


class Lgc(str, Enum):
    SANS = "sans"
    SERIF = "serif"
    MONO = "mono"


class Serifness(str, Enum):
    SANS = "sans"
    SERIF = "serif"


class AdlamNko(str, Enum):
    SANS = "sans"
    UNJOINED = "unjoined"


class Arabic(str, Enum):
    SANS = "sans"
    KUFI = "kufi"
    NASKH = "naskh"
    NASKH_UI = "naskh_ui"
    NASTALIQ = "nastaliq"


class Hebrew(str, Enum):
    SANS = "sans"
    SERIF = "serif"
    RASHI = "rashi"


class Khitan(str, Enum):
    SERIF = "serif"
    VERTICAL = "vertical"
    ROTATED = "rotated"


class Nushu(str, Enum):
    SANS = "sans"
    TRADITIONAL = "traditional"


class Syriac(str, Enum):
    SANS = "sans"
    WESTERN = "western"
    EASTERN = "eastern"


class ThaiLao(str, Enum):
    SANS_LOOPED = "sans_looped"
    SANS_UNLOOPED = "sans_unlooped"
    SERIF = "serif"


class Cjk(str, Enum):
    SANS_JP = "sans_jp"
    SANS_KR = "sans_kr"
    SANS_SC = "sans_sc"
    SANS_TC = "sans_tc"
    SANS_HK = "sans_hk"
    SERIF_JP = "serif_jp"
    SERIF_KR = "serif_kr"
    SERIF_SC = "serif_sc"
    SERIF_TC = "serif_tc"
    SERIF_HK = "serif_hk"


SERIFNESS_FAMILIES = (
    "armenian",
    "balinese",
    "bengali",
    "devanagari",
    "ethiopic",
    "georgian",
    "grantha",
    "gujarati",
    "gurmukhi",
    "kannada",
    "khmer",
    "khojki",
    "malayalam",
    "myanmar",
    "oriya",
    "sinhala",
    "tamil",
    "telugu",
    "vithkuqi",
)

_SANS = (Serifness.SANS,)
_SERIF = (Serifness.SERIF,)


class StyleConfiguration(BaseModel):
    """Ordered style preferences per script family.

    Every list is tried in order and the first entry actually supporting a code
    point wins. The three booleans are tie-breaks rather than filters.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    font_ext: FontExt = FontExt.TTF
    prefer_ui: bool = False
    prefer_cjk: bool = False
    prefer_math: bool = False

    lgc: tuple[Lgc, ...] = (Lgc.SANS,)
    armenian: tuple[Serifness, ...] = _SANS
    balinese: tuple[Serifness, ...] = _SANS
    bengali: tuple[Serifness, ...] = _SANS
    devanagari: tuple[Serifness, ...] = _SANS
    ethiopic: tuple[Serifness, ...] = _SANS
    georgian: tuple[Serifness, ...] = _SANS
    grantha: tuple[Serifness, ...] = _SANS
    gujarati: tuple[Serifness, ...] = _SANS
    gurmukhi: tuple[Serifness, ...] = _SANS
    kannada: tuple[Serifness, ...] = _SANS
    khmer: tuple[Serifness, ...] = _SANS
    khojki: tuple[Serifness, ...] = _SANS
    malayalam: tuple[Serifness, ...] = _SANS
    myanmar: tuple[Serifness, ...] = _SANS
    oriya: tuple[Serifness, ...] = _SANS
    sinhala: tuple[Serifness, ...] = _SANS
    tamil: tuple[Serifness, ...] = _SANS
    telugu: tuple[Serifness, ...] = _SANS
    vithkuqi: tuple[Serifness, ...] = _SANS

    adlam: tuple[AdlamNko, ...] = (AdlamNko.SANS,)
    nko: tuple[AdlamNko, ...] = (AdlamNko.SANS,)
    arabic: tuple[Arabic, ...] = (Arabic.SANS,)
    hebrew: tuple[Hebrew, ...] = (Hebrew.SANS,)
    khitan: tuple[Khitan, ...] = (Khitan.SERIF,)
    nushu: tuple[Nushu, ...] = (Nushu.SANS,)
    syriac: tuple[Syriac, ...] = (Syriac.SANS,)
    thai: tuple[ThaiLao, ...] = (ThaiLao.SANS_UNLOOPED,)
    lao: tuple[ThaiLao, ...] = (ThaiLao.SANS_LOOPED,)
    cjk: tuple[Cjk, ...] = (Cjk.SANS_SC,)

    @classmethod
    def new_sans(cls, **overrides: Any) -> StyleConfiguration:
        """Sans everywhere a sans cut exists."""
        return cls(**overrides)

    @classmethod
    def prefer_serif(cls, **overrides: Any) -> StyleConfiguration:
        """Serif first, sans as the fallback for scripts lacking a serif cut."""
        payload: dict[str, Any] = {name: (Serifness.SERIF, Serifness.SANS) for name in SERIFNESS_FAMILIES}
        payload.update(
            lgc=(Lgc.SERIF, Lgc.SANS),
            arabic=(Arabic.NASKH, Arabic.SANS),
            hebrew=(Hebrew.SERIF, Hebrew.SANS),
            khitan=(Khitan.SERIF,),
            thai=(ThaiLao.SERIF, ThaiLao.SANS_UNLOOPED),
            lao=(ThaiLao.SERIF, ThaiLao.SANS_LOOPED),
            cjk=(Cjk.SERIF_SC, Cjk.SANS_SC),
        )
        payload.update(overrides)
        return cls(**payload)

    def with_overrides(self, **overrides: Any) -> StyleConfiguration:
        """Return a validated copy with some fields replaced."""
        payload = self.model_dump()
        payload.update(overrides)
        return type(self).model_validate(payload)

    def preferences(self, family: str) -> tuple[str, ...]:
        """Return the style keys configured for ``family`` as plain strings."""
        values = getattr(self, family)
        return tuple(value.value for value in values)

    def to_string_list(self) -> list[str]:
        """Flatten preferences into ``family_style`` tokens for display."""
        tokens: list[str] = []
        for name in family_names():
            tokens.extend(f"{name}_{style}" for style in self.preferences(name))
        return tokens


def family_names() -> tuple[str, ...]:
    """Return every configurable script family, in declaration order."""
    skip = {"font_ext", "prefer_ui", "prefer_cjk", "prefer_math"}
    return tuple(name for name in StyleConfiguration.model_fields if name not in skip)


def family_styles(family: str) -> tuple[str, ...]:
    """Return the style keys accepted by ``family``."""
    enum_type = get_args(StyleConfiguration.model_fields[family].annotation)[0]
    return tuple(member.value for member in enum_type)


PRESETS = {
    "sans": StyleConfiguration.new_sans,
    "serif": StyleConfiguration.prefer_serif,
}


def parse_style_config(raw: Any) -> StyleConfiguration:
    """Parse a preset name or a mapping into a configuration.

    Mappings may carry a ``preset`` key whose defaults the remaining keys
    override; scalar preference values are promoted to one-element lists.
    """
    if raw is None:
        return StyleConfiguration()
    if isinstance(raw, StyleConfiguration):
        return raw
    if isinstance(raw, str):
        factory = PRESETS.get(raw.strip().lower())
        if factory is None:
            raise ConfigurationError(f"Unknown style preset '{raw}'.")
        return factory()
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Unsupported style configuration type: {type(raw)!r}")

    payload = dict(raw)
    preset = payload.pop("preset", None)
    base = parse_style_config(preset) if preset is not None else StyleConfiguration()
    families = set(family_names())
    for key, value in list(payload.items()):
        if isinstance(value, str) and key in families:
            payload[key] = [value]
    try:
        return base.with_overrides(**payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid style configuration: {exc}") from exc


def load_style_config(path: Path) -> StyleConfiguration:
    """Read a YAML style configuration from ``path``."""
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read style configuration '{path}': {exc}") from exc
    return parse_style_config(raw)


__all__ = [
    "PRESETS",
    "SERIFNESS_FAMILIES",
    "AdlamNko",
    "Arabic",
    "Cjk",
    "FontExt",
    "Hebrew",
    "Khitan",
    "Lgc",
    "Nushu",
    "Serifness",
    "StyleConfiguration",
    "Syriac",
    "ThaiLao",
    "family_names",
    "family_styles",
    "load_style_config",
    "parse_style_config",
]
