from __future__ import annotations

from pathlib import Path

import pytest

from notoize.cache import CACHE_DIR_ENV, FontCache, default_cache_root


def test_cache_root_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CACHE_DIR_ENV, str(tmp_path / "explicit"))
    assert default_cache_root() == tmp_path / "explicit"
    monkeypatch.delenv(CACHE_DIR_ENV)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
    assert default_cache_root() == tmp_path / "xdg" / "notoize"
    monkeypatch.delenv("XDG_CACHE_HOME")
    assert default_cache_root() == Path.home() / ".cache" / "notoize"


def test_paths_are_created_lazily(tmp_path: Path) -> None:
    cache = FontCache(tmp_path / "root")
    assert not cache.root.exists()
    target = cache.path("overview", "blocks.json")
    assert target.parent.is_dir()
    assert not target.exists()
    with cache.tempdir() as scratch:
        assert scratch.parent == cache.root
    assert not scratch.exists()


def test_clear_namespaces_or_everything(tmp_path: Path) -> None:
    cache = FontCache(tmp_path / "root")
    cache.path("overview", "blocks.json").write_text("[]", encoding="utf-8")
    cache.path("fonts", "NotoSans-Regular.ttf").write_bytes(b"\0")
    assert cache.clear(["overview", "missing"]) == [cache.root / "overview"]
    assert (cache.root / "fonts").exists()
    assert cache.clear() == [cache.root]
    assert not cache.root.exists()
