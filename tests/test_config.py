from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from notoize.config import (
    SERIFNESS_FAMILIES,
    Arabic,
    FontExt,
    Lgc,
    StyleConfiguration,
    ThaiLao,
    family_names,
    family_styles,
    load_style_config,
    parse_style_config,
)
from notoize.exceptions import ConfigurationError


def test_defaults_are_sans() -> None:
    config = StyleConfiguration()
    assert config.lgc == (Lgc.SANS,)
    assert config.arabic == (Arabic.SANS,)
    assert config.thai == (ThaiLao.SANS_UNLOOPED,)
    assert config.font_ext is FontExt.TTF
    assert not (config.prefer_ui or config.prefer_cjk or config.prefer_math)
    assert StyleConfiguration.new_sans() == config


def test_serif_preset_falls_back_to_sans() -> None:
    config = StyleConfiguration.prefer_serif()
    assert config.preferences("lgc") == ("serif", "sans")
    assert config.preferences("arabic") == ("naskh", "sans")
    for family in SERIFNESS_FAMILIES:
        assert config.preferences(family) == ("serif", "sans")


def test_presets_accept_overrides() -> None:
    config = StyleConfiguration.prefer_serif(prefer_ui=True, arabic=["kufi"])
    assert config.prefer_ui
    assert config.preferences("arabic") == ("kufi",)


def test_configuration_is_frozen() -> None:
    config = StyleConfiguration()
    with pytest.raises(ValidationError):
        config.prefer_ui = True


def test_with_overrides_validates() -> None:
    config = StyleConfiguration().with_overrides(thai=["sans_looped", "serif"])
    assert config.thai == (ThaiLao.SANS_LOOPED, ThaiLao.SERIF)
    with pytest.raises(ValidationError):
        StyleConfiguration().with_overrides(thai=["kufi"])


def test_family_catalogue() -> None:
    names = family_names()
    assert names[0] == "lgc"
    assert "prefer_ui" not in names
    assert len(names) == 30
    assert family_styles("khitan") == ("serif", "vertical", "rotated")


def test_string_tokens() -> None:
    tokens = StyleConfiguration.prefer_serif().to_string_list()
    assert tokens[:2] == ["lgc_serif", "lgc_sans"]
    assert "arabic_naskh" in tokens


def test_parse_presets_and_passthrough() -> None:
    assert parse_style_config(None) == StyleConfiguration()
    assert parse_style_config("Serif") == StyleConfiguration.prefer_serif()
    config = StyleConfiguration(prefer_math=True)
    assert parse_style_config(config) is config
    with pytest.raises(ConfigurationError, match="Unknown style preset"):
        parse_style_config("fancy")
    with pytest.raises(ConfigurationError):
        parse_style_config(42)


def test_parse_mapping_promotes_scalars() -> None:
    config = parse_style_config(
        {"preset": "serif", "hebrew": "rashi", "font_ext": "otf", "prefer_cjk": True}
    )
    assert config.preferences("hebrew") == ("rashi",)
    assert config.preferences("lgc") == ("serif", "sans")
    assert config.font_ext is FontExt.OTF
    assert config.prefer_cjk


def test_parse_mapping_leaves_flag_strings_alone() -> None:
    assert parse_style_config({"prefer_ui": "yes", "prefer_math": "false"}).prefer_ui
    with pytest.raises(ConfigurationError, match="prefer_cjk"):
        parse_style_config({"prefer_cjk": "sometimes"})


def test_parse_mapping_rejects_unknown_keys_and_styles() -> None:
    with pytest.raises(ConfigurationError, match="Invalid style configuration"):
        parse_style_config({"klingon": ["sans"]})
    with pytest.raises(ConfigurationError):
        parse_style_config({"arabic": ["rashi"]})


def test_load_style_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "style.yaml"
    path.write_text("arabic: [kufi, naskh]\nthai: sans_looped\nprefer_ui: true\n", encoding="utf-8")
    config = load_style_config(path)
    assert config.preferences("arabic") == ("kufi", "naskh")
    assert config.preferences("thai") == ("sans_looped",)
    assert config.prefer_ui


def test_load_style_config_reports_bad_files(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_style_config(tmp_path / "missing.yaml")
    broken = tmp_path / "broken.yaml"
    broken.write_text("arabic: [kufi\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_style_config(broken)
