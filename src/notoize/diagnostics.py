"""Per-code-point issues and stack-level diagnostic reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from notoize.scripts import ScriptClassifier, default_classifier


def format_codepoint(codepoint: int) -> str:
    return f"U+{codepoint:04X}"


@dataclass(frozen=True, slots=True)
class UnsatisfiablePreference:
    """The configuration asks for styles none of the candidates provide."""

    kind: ClassVar[str] = "unsatisfiable-preference"

    codepoint: int
    family: str
    requested: tuple[str, ...]
    candidates: tuple[str, ...]

    def message(self) -> str:
        requested = ", ".join(self.requested) or "-"
        candidates = ", ".join(self.candidates) or "-"
        return (
            f"{format_codepoint(self.codepoint)}: no '{self.family}' preference "
            f"({requested}) is available among {candidates}."
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "codepoint": format_codepoint(self.codepoint),
            "family": self.family,
            "requested": list(self.requested),
            "candidates": list(self.candidates),
        }


@dataclass(frozen=True, slots=True)
class UnsupportedCodePoint:
    """No font is available for a code point.

    ``reason`` is ``"no-block"`` for unassigned gaps and ``"no-candidates"``
    when the owning block lists no variant for it.
    """

    kind: ClassVar[str] = "unsupported-codepoint"

    codepoint: int
    reason: str

    def message(self) -> str:
        if self.reason == "no-block":
            return f"{format_codepoint(self.codepoint)}: not inside any known block."
        return f"{format_codepoint(self.codepoint)}: no font available."

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "codepoint": format_codepoint(self.codepoint),
            "reason": self.reason,
        }


Issue = Union[UnsatisfiablePreference, UnsupportedCodePoint]


@dataclass(frozen=True, slots=True)
class ScriptConflict:
    """A code point needing variants from several scripts, hence several files."""

    codepoint: int
    variants: tuple[str, ...]
    scripts: tuple[str, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "codepoint": format_codepoint(self.codepoint),
            "variants": list(self.variants),
            "scripts": list(self.scripts),
        }


def _selection_map(stack: Any) -> Mapping[int, Sequence[str]]:
    return stack.map if hasattr(stack, "map") else stack


def conflicts(
    stack: Any, classifier: ScriptClassifier | None = None
) -> list[ScriptConflict]:
    """Report code points whose selected variants span more than one script."""
    classifier = classifier or default_classifier()
    report: list[ScriptConflict] = []
    for codepoint, variants in sorted(_selection_map(stack).items()):
        scripts = sorted({classifier.classify(name) for name in variants}, key=classifier.order)
        if len(scripts) > 1:
            report.append(
                ScriptConflict(codepoint=codepoint, variants=tuple(variants), scripts=tuple(scripts))
            )
    return report


def missing_variants(
    selected: Iterable[str], classifier: ScriptClassifier | None = None
) -> list[str]:
    """Return the catalog siblings, in the same scripts, that were not selected."""
    classifier = classifier or default_classifier()
    chosen = list(dict.fromkeys(selected))
    scripts = sorted({classifier.classify(name) for name in chosen}, key=classifier.order)
    picked = set(chosen)
    return [
        variant
        for script in scripts
        for variant in classifier.variants_for_script(script)
        if variant not in picked
    ]


__all__ = [
    "Issue",
    "ScriptConflict",
    "UnsatisfiablePreference",
    "UnsupportedCodePoint",
    "conflicts",
    "format_codepoint",
    "missing_variants",
]
