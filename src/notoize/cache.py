"""Explicitly owned cache root for catalog documents and font files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import os
from pathlib import Path
import shutil
import tempfile


CACHE_DIR_ENV = "NOTOIZE_CACHE_DIR"


def default_cache_root() -> Path:
    """Resolve the cache root from the environment."""
    env_cache = os.environ.get(CACHE_DIR_ENV)
    if env_cache:
        return Path(env_cache).expanduser()
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache).expanduser() / "notoize"
    return Path.home() / ".cache" / "notoize"


class FontCache:
    """Resolve persistent and temporary paths for the resolver tooling.

    The cache defaults to ``~/.cache/notoize`` so that repeated runs reuse the
    downloaded block documents and font files. Nothing is created until a path
    is requested.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or default_cache_root()

    def ensure(self) -> Path:
        """Ensure the cache root exists and return it."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def path(self, *parts: str | Path) -> Path:
        """Return a path under the cache root, creating parent directories."""
        base = self.ensure()
        target = base.joinpath(*parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    @contextmanager
    def tempdir(self) -> Iterator[Path]:
        """Provide a temporary directory inside the cache root."""
        self.ensure()
        with tempfile.TemporaryDirectory(dir=self.root) as tmp:
            yield Path(tmp)

    def clear(self, namespaces: Iterable[str] | None = None) -> list[Path]:
        """Remove cached namespaces (or the whole root) and return what was removed."""
        if namespaces is None:
            targets = [self.root]
        else:
            targets = [self.root / name for name in namespaces]
        cleared: list[Path] = []
        for path in targets:
            if not path.exists():
                continue
            try:
                shutil.rmtree(path)
            except OSError:
                continue
            cleared.append(path)
        return cleared


__all__ = ["CACHE_DIR_ENV", "FontCache", "default_cache_root"]
