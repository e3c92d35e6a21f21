"""Helpers to fetch the font files of a resolved stack on demand."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
import urllib.error

from notoize.cache import FontCache
from notoize.exceptions import DataSourceError
from notoize.http import open_url
from notoize.logging import FontPipelineLogger
from notoize.stack import FontFile


MIN_FONT_SIZE = 1024


class NotoFontDownloader:
    """Download individual Noto font files into the font cache."""

    def __init__(
        self,
        *,
        cache: FontCache | None = None,
        logger: FontPipelineLogger | None = None,
        timeout: float | None = 60.0,
    ):
        self.cache = cache or FontCache()
        self.logger = logger or FontPipelineLogger()
        self.timeout = timeout
        self.fonts_dir = self.cache.path("fonts")

    def _download(self, url: str) -> bytes:
        try:
            with open_url(url, timeout=self.timeout) as response:
                data = response.read()
        except (urllib.error.URLError, OSError) as exc:
            raise DataSourceError(f"Unable to download '{url}': {exc}") from exc
        if len(data) < MIN_FONT_SIZE:
            raise DataSourceError(f"Download of '{url}' is truncated ({len(data)} bytes).")
        return data

    def fetch(self, font: FontFile) -> Path:
        """Return the cached path of ``font``, downloading it when missing."""
        dest = self.fonts_dir / font.filename
        if dest.exists():
            return dest
        data = self._download(font.url)
        with self.cache.tempdir() as tmp:
            staged = tmp / font.filename
            staged.write_bytes(data)
            dest.parent.mkdir(parents=True, exist_ok=True)
            staged.replace(dest)
        self.logger.info("Downloaded font %s", font.filename)
        return dest

    def ensure(self, files: Iterable[FontFile], *, strict: bool = False) -> dict[str, Path]:
        """Fetch every file, keyed by family; failures are warned about unless ``strict``."""
        files = list(files)
        paths: dict[str, Path] = {}
        with self.logger.progress("Fetching fonts", total=len(files)) as advance:
            for font in files:
                try:
                    paths[font.family] = self.fetch(font)
                except DataSourceError as exc:
                    if strict:
                        raise
                    self.logger.warning("Skipping %s: %s", font.family, exc)
                finally:
                    advance(1)
        return paths


__all__ = ["MIN_FONT_SIZE", "NotoFontDownloader"]
