from __future__ import annotations

from importlib import resources

import pytest
import yaml

from notoize.config import family_names
from notoize.exceptions import CatalogDataError, UnknownVariantError
from notoize.scripts import (
    NEUTRAL_SCRIPT,
    ScriptClassifier,
    default_classifier,
    is_ui_variant,
    ui_siblings,
)


def _table() -> list:
    text = resources.files("notoize.data").joinpath("variants.yaml").read_text(encoding="utf-8")
    return yaml.safe_load(text)


@pytest.mark.parametrize(
    ("variant", "script"),
    [
        ("Sans", NEUTRAL_SCRIPT),
        ("Serif Display", NEUTRAL_SCRIPT),
        ("Kufi Arabic", "arabic"),
        ("Nastaliq Urdu", "arabic"),
        ("Rashi Hebrew", "hebrew"),
        ("Fangsong KSS Rotated", "khitan"),
        ("Sans Thai Looped", "thai"),
        ("Serif CJK HK", "cjk"),
        ("Sans Math", "math"),
        ("Sans Symbols 2", "symbols"),
    ],
)
def test_classify_known_variants(variant: str, script: str) -> None:
    assert default_classifier().classify(variant) == script


def test_classify_unknown_variant_raises() -> None:
    with pytest.raises(UnknownVariantError) as excinfo:
        default_classifier().classify("Comic Sans")
    assert excinfo.value.variant == "Comic Sans"


def test_validate_reports_block_of_first_unknown_literal() -> None:
    classifier = default_classifier()
    classifier.validate(["Sans", "Serif Thai"])
    with pytest.raises(UnknownVariantError) as excinfo:
        classifier.validate(["Sans", "Wingdings", "Comic Sans"], block_id=4)
    assert excinfo.value.variant == "Wingdings"
    assert excinfo.value.block_id == 4


def test_catalog_is_closed_and_large() -> None:
    known = default_classifier().all_known_variants()
    assert len(known) == len(set(known))
    assert len(known) > 200
    assert {"Sans", "Kufi Arabic", "Fangsong KSS Rotated"} <= set(known)


def test_every_configuration_family_governs_a_script() -> None:
    classifier = default_classifier()
    governed = {classifier.family_for_script(script) for script in classifier.scripts()}
    assert set(family_names()) <= governed


def test_style_literals_follow_the_table() -> None:
    classifier = default_classifier()
    assert classifier.style_literal("", "mono") == "Sans Mono"
    assert classifier.style_literal("arabic", "naskh_ui") == "Naskh Arabic UI"
    assert classifier.style_literal("thai", "sans_unlooped") == "Sans Thai"
    assert classifier.style_literal("cjk", "serif_jp") == "Serif CJK JP"
    assert classifier.style_literal("math", "sans") is None
    assert classifier.style_literal("missing", "sans") is None


def test_group_orders_scripts_by_declaration() -> None:
    grouped = default_classifier().group(["Sans Syriac", "Serif", "Naskh Arabic", "Sans"])
    assert list(grouped) == ["", "arabic", "syriac"]
    assert grouped[""] == ["Serif", "Sans"]


def test_ui_markers() -> None:
    assert is_ui_variant("Sans Arabic UI")
    assert is_ui_variant("Serif Display")
    assert not is_ui_variant("Sans Symbols 2")
    assert not is_ui_variant("Sans Buginese")
    assert ui_siblings("Sans Thai") == ("Sans Thai UI", "Sans Thai Display")


def test_duplicate_literal_is_rejected() -> None:
    table = _table()
    table.append({"script": "extra", "variants": ["Sans"]})
    with pytest.raises(CatalogDataError, match="declared twice"):
        ScriptClassifier.from_payload(table)


def test_incomplete_family_is_rejected() -> None:
    table = _table()
    for entry in table:
        if entry["script"] == "hebrew":
            entry["variants"] = [v for v in entry["variants"] if v["name"] != "Rashi Hebrew"]
    with pytest.raises(CatalogDataError, match="rashi"):
        ScriptClassifier.from_payload(table)


def test_style_without_family_is_rejected() -> None:
    table = _table()
    table.append(
        {"script": "extra", "variants": [{"name": "Sans Extra", "style": "sans"}]}
    )
    with pytest.raises(CatalogDataError, match="has no family"):
        ScriptClassifier.from_payload(table)


def test_every_known_variant_classifies() -> None:
    classifier = default_classifier()
    scripts = set(classifier.scripts())
    for variant in classifier.all_known_variants():
        assert classifier.classify(variant) in scripts
