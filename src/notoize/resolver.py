"""Per-code-point variant selection against a style configuration."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from notoize.config import StyleConfiguration
from notoize.diagnostics import Issue, UnsatisfiablePreference, UnsupportedCodePoint
from notoize.scripts import (
    NEUTRAL_SCRIPT,
    ScriptClassifier,
    default_classifier,
    is_ui_variant,
    ui_siblings,
)


CJK_SCRIPT = "cjk"
MATH_SCRIPT = "math"
SYMBOLS_SCRIPT = "symbols"


@dataclass(frozen=True, slots=True)
class Selection:
    """Variants picked for one code point, plus what went wrong."""

    codepoint: int
    variants: tuple[str, ...]
    issues: tuple[Issue, ...] = ()


class Resolver:
    """Pick the variants a code point needs.

    Candidates are grouped by script, and the groups are resolved in slots. A
    slot is one script, or a tie-break pair (math/symbols, CJK/generic) tried
    winner first. A slot is resolved through its family's preference list (the
    LGC list for the generic styles). A code point shared by several slots is
    resolved for every script already in use, and for the generic styles when
    Latin is in use or nothing else is, which may select more than one
    variant. When none of those yields a variant the remaining slots are tried
    in order, and the first satisfiable one wins.

    With ``reuse_selected`` a satisfiable preference that is already part of
    the stack wins over the first satisfiable one.
    """

    def __init__(
        self,
        classifier: ScriptClassifier | None = None,
        *,
        reuse_selected: bool = True,
    ) -> None:
        self.classifier = classifier or default_classifier()
        self.reuse_selected = reuse_selected

    def slots(
        self, grouped: dict[str, list[str]], config: StyleConfiguration
    ) -> list[tuple[str, ...]]:
        """Order the script groups, merging tie-break pairs winner first."""
        pairs = (
            (MATH_SCRIPT, SYMBOLS_SCRIPT) if config.prefer_math else (SYMBOLS_SCRIPT, MATH_SCRIPT),
            (CJK_SCRIPT, NEUTRAL_SCRIPT) if config.prefer_cjk else (NEUTRAL_SCRIPT, CJK_SCRIPT),
        )
        present = [pair for pair in pairs if all(script in grouped for script in pair)]
        slots: list[tuple[str, ...]] = []
        for script in grouped:
            slot = next((pair for pair in present if script in pair), (script,))
            if slot not in slots:
                slots.append(slot)
        return slots

    def is_multi_script(self, candidates: Sequence[str], config: StyleConfiguration) -> bool:
        return len(self.slots(self.classifier.group(candidates), config)) > 1

    def select(
        self,
        codepoint: int,
        candidates: Sequence[str],
        config: StyleConfiguration,
        already_selected: Collection[str] = frozenset(),
    ) -> Selection:
        if not candidates:
            return Selection(
                codepoint, (), (UnsupportedCodePoint(codepoint, reason="no-candidates"),)
            )
        grouped = self.classifier.group(candidates)
        slots = self.slots(grouped, config)
        targets = slots if len(slots) == 1 else self._applicable_slots(slots, already_selected)

        chosen: list[str] = []
        issues: list[Issue] = []
        for slot in targets:
            variant, issue = self._resolve_slot(
                codepoint, slot, grouped, config, already_selected
            )
            if variant is not None and variant not in chosen:
                chosen.append(variant)
            if issue is not None:
                issues.append(issue)
        if chosen:
            return Selection(codepoint, tuple(chosen), tuple(issues))

        for slot in slots:
            if slot in targets:
                continue
            variant, issue = self._resolve_slot(
                codepoint, slot, grouped, config, already_selected
            )
            if variant is not None:
                return Selection(codepoint, (variant,))
            if not issues and issue is not None:
                issues.append(issue)
        return Selection(codepoint, (), tuple(issues))

    def _applicable_slots(
        self, slots: list[tuple[str, ...]], already_selected: Collection[str]
    ) -> list[tuple[str, ...]]:
        active = {
            self.classifier.classify(name)
            for name in already_selected
            if self.classifier.is_known(name)
        }
        targets = [
            slot
            for slot in slots
            if NEUTRAL_SCRIPT not in slot and any(script in active for script in slot)
        ]
        neutral = next((slot for slot in slots if NEUTRAL_SCRIPT in slot), None)
        if neutral is not None and (any(script in active for script in neutral) or not targets):
            targets.insert(0, neutral)
        return targets

    def _resolve_slot(
        self,
        codepoint: int,
        slot: tuple[str, ...],
        grouped: dict[str, list[str]],
        config: StyleConfiguration,
        already_selected: Collection[str],
    ) -> tuple[str | None, Issue | None]:
        first_issue: Issue | None = None
        for script in slot:
            variant, issue = self._resolve_group(
                codepoint, script, grouped[script], config, already_selected
            )
            if variant is not None:
                return variant, None
            if first_issue is None:
                first_issue = issue
        return None, first_issue

    def _resolve_group(
        self,
        codepoint: int,
        script: str,
        variants: list[str],
        config: StyleConfiguration,
        already_selected: Collection[str],
    ) -> tuple[str | None, Issue | None]:
        family = self.classifier.family_for_script(script)
        if family is not None:
            requested = config.preferences(family)
            options: list[str] = []
            for style in requested:
                literal = self.classifier.style_literal(script, style)
                if literal is None or literal in options:
                    continue
                if literal in variants or (
                    config.prefer_ui and any(sib in variants for sib in ui_siblings(literal))
                ):
                    options.append(literal)
            if not options:
                return None, UnsatisfiablePreference(
                    codepoint=codepoint,
                    family=family,
                    requested=requested,
                    candidates=tuple(variants),
                )
        else:
            options = [name for name in variants if not is_ui_variant(name)]
            if not options and config.prefer_ui:
                options = list(variants)
            if not options:
                return None, UnsatisfiablePreference(
                    codepoint=codepoint,
                    family=script,
                    requested=(),
                    candidates=tuple(variants),
                )
        return self._pick(options, variants, config, already_selected), None

    def _pick(
        self,
        options: list[str],
        variants: list[str],
        config: StyleConfiguration,
        already_selected: Collection[str],
    ) -> str:
        resolved = [self._ui_form(name, variants, config) for name in options]
        if self.reuse_selected:
            for name in resolved:
                if name in already_selected:
                    return name
        return resolved[0]

    @staticmethod
    def _ui_form(name: str, variants: list[str], config: StyleConfiguration) -> str:
        if not config.prefer_ui or is_ui_variant(name):
            return name
        for sibling in ui_siblings(name):
            if sibling in variants:
                return sibling
        return name


__all__ = ["Resolver", "Selection"]
