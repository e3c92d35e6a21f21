"""Font stack assembly and font file naming."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from notoize.config import FontExt
from notoize.diagnostics import (
    Issue,
    ScriptConflict,
    conflicts,
    format_codepoint,
    missing_variants,
)
from notoize.scripts import ScriptClassifier


NOTOFONTS_FILES_URL = "https://notofonts.github.io/fonts"
NOTO_CJK_URL = "https://raw.githubusercontent.com/notofonts/noto-cjk/main"
NOTO_EMOJI_URL = "https://raw.githubusercontent.com/googlefonts/noto-emoji/main/fonts"

_CJK_REGIONS = {
    "JP": "Japanese",
    "KR": "Korean",
    "SC": "SimplifiedChinese",
    "TC": "TraditionalChinese",
    "HK": "TraditionalChineseHK",
}


@dataclass(frozen=True, slots=True)
class FontFile:
    """Concrete file name and download location of a selected variant."""

    family: str
    filename: str
    url: str

    @classmethod
    def for_variant(cls, variant: str, ext: FontExt | str = FontExt.TTF) -> FontFile:
        ext = FontExt(ext).value
        base = "Noto" + variant.replace(" ", "")
        tokens = variant.split()
        if "CJK" in tokens:
            region = tokens[-1].upper()
            style_dir = "Sans/Mono" if "Mono" in tokens else tokens[0]
            filename = f"{base[: -len(region)]}{region.lower()}-Regular.otf"
            url = f"{NOTO_CJK_URL}/{style_dir}/OTF/{_CJK_REGIONS.get(region, region)}/{filename}"
            return cls(family=variant, filename=filename, url=url)
        if "Emoji" in tokens:
            filename = f"{base}.ttf"
            return cls(family=variant, filename=filename, url=f"{NOTO_EMOJI_URL}/{filename}")
        filename = f"{base}-Regular.{ext}"
        hinting = "hinted" if ext == FontExt.TTF.value else "unhinted"
        url = f"{NOTOFONTS_FILES_URL}/{base}/{hinting}/{ext}/{filename}"
        return cls(family=variant, filename=filename, url=url)


@dataclass(slots=True)
class FontStack:
    """Ordered family names plus the per-code-point selections behind them."""

    names: tuple[str, ...] = ()
    map: dict[int, tuple[str, ...]] = field(default_factory=dict)
    issues: tuple[Issue, ...] = ()

    def __iter__(self) -> Any:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    @property
    def unsupported(self) -> tuple[int, ...]:
        """Code points for which nothing was selected."""
        return tuple(codepoint for codepoint, variants in self.map.items() if not variants)

    def conflicts(self, classifier: ScriptClassifier | None = None) -> list[ScriptConflict]:
        return conflicts(self, classifier)

    def missing_variants(self, classifier: ScriptClassifier | None = None) -> list[str]:
        """Stylistic siblings of every selected family that were never selected."""
        return missing_variants(self.names, classifier)

    def files(self, ext: FontExt | str = FontExt.TTF) -> list[FontFile]:
        return [FontFile.for_variant(name, ext) for name in self.names]

    def to_css(self) -> str:
        """Render the stack as a CSS ``font-family`` value."""
        return ", ".join(f'"Noto {name}"' for name in self.names)

    def to_payload(self, classifier: ScriptClassifier | None = None) -> dict[str, Any]:
        return {
            "names": list(self.names),
            "map": {format_codepoint(cp): list(variants) for cp, variants in self.map.items()},
            "conflicts": [entry.to_payload() for entry in self.conflicts(classifier)],
            "issues": [issue.to_payload() for issue in self.issues],
        }


def assemble(
    selections: Iterable[tuple[int, Sequence[str]]],
    issues: Iterable[Issue] = (),
) -> FontStack:
    """Fold per-code-point selections into a stack, names in first-seen order."""
    names: dict[str, None] = {}
    mapping: dict[int, tuple[str, ...]] = {}
    for codepoint, variants in selections:
        chosen = tuple(variants)
        mapping[codepoint] = chosen
        for name in chosen:
            names.setdefault(name, None)
    return FontStack(names=tuple(names), map=mapping, issues=tuple(issues))


__all__ = ["FontFile", "FontStack", "assemble"]
