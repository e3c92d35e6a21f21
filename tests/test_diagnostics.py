from __future__ import annotations

from notoize.diagnostics import (
    ScriptConflict,
    UnsatisfiablePreference,
    UnsupportedCodePoint,
    conflicts,
    format_codepoint,
    missing_variants,
)
from notoize.stack import FontStack


def test_format_codepoint() -> None:
    assert format_codepoint(0x41) == "U+0041"
    assert format_codepoint(0x1F600) == "U+1F600"


def test_conflicts_only_report_cross_script_selections() -> None:
    selection = {
        0x20: ("Sans", "Sans Arabic"),
        0x41: ("Sans",),
        0x060C: ("Sans Arabic", "Naskh Arabic"),
    }
    assert conflicts(selection) == [
        ScriptConflict(codepoint=0x20, variants=("Sans", "Sans Arabic"), scripts=("", "arabic"))
    ]
    assert FontStack(map=selection).conflicts() == conflicts(selection)


def test_missing_variants_lists_unselected_siblings() -> None:
    assert missing_variants(["Sans Arabic"]) == [
        "Kufi Arabic",
        "Naskh Arabic",
        "Naskh Arabic UI",
        "Nastaliq Urdu",
        "Sans Arabic UI",
    ]
    assert missing_variants(["Sans Hebrew", "Serif Hebrew", "Rashi Hebrew"]) == []
    stack = FontStack(names=("Sans Thai", "Sans Math"))
    assert stack.missing_variants() == ["Sans Thai Looped", "Serif Thai", "Sans Thai UI"]


def test_issue_messages_and_payloads() -> None:
    unsatisfiable = UnsatisfiablePreference(
        codepoint=0x0E3F, family="thai", requested=("sans_looped",), candidates=("Serif Thai",)
    )
    assert unsatisfiable.message() == (
        "U+0E3F: no 'thai' preference (sans_looped) is available among Serif Thai."
    )
    assert unsatisfiable.to_payload()["kind"] == "unsatisfiable-preference"
    gap = UnsupportedCodePoint(0x0400, reason="no-block")
    assert "not inside any known block" in gap.message()
    assert UnsupportedCodePoint(0x0378, reason="no-candidates").message() == (
        "U+0378: no font available."
    )
