"""Block index and block support sources (remote, local mirror, cached)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
import urllib.error

from notoize.blocks import BlockDescriptor
from notoize.cache import FontCache
from notoize.exceptions import DataSourceError
from notoize.http import fetch_bytes
from notoize.logging import FontPipelineLogger


NOTOFONTS_OVERVIEW_URL = "https://notofonts.github.io/overview/data"
BLOCKS_DOCUMENT = "blocks.json"


def block_document_name(block_id: int) -> str:
    return f"block-{block_id}.json"


@runtime_checkable
class BlockIndexSource(Protocol):
    """Provide the list of Unicode blocks, called once per client."""

    def list_blocks(self) -> list[BlockDescriptor]: ...


@runtime_checkable
class BlockSupportSource(Protocol):
    """Provide the raw support document of one block."""

    def load_block_support(self, block_id: int) -> Mapping[str, Any]: ...


def _decode_json(raw: bytes | str, origin: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise DataSourceError(f"Malformed JSON document '{origin}': {exc}") from exc


def _parse_blocks(payload: Any, origin: str) -> list[BlockDescriptor]:
    if not isinstance(payload, list):
        raise DataSourceError(f"Block index '{origin}' must be a JSON list.")
    try:
        return [BlockDescriptor.from_mapping(entry) for entry in payload]
    except (KeyError, TypeError, ValueError) as exc:
        raise DataSourceError(f"Invalid block entry in '{origin}': {exc}") from exc


def _check_document(payload: Any, origin: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise DataSourceError(f"Block document '{origin}' must be a JSON object.")
    return payload


class NotofontsSource:
    """Fetch the notofonts overview documents over HTTPS."""

    def __init__(
        self,
        base_url: str = NOTOFONTS_OVERVIEW_URL,
        *,
        timeout: float | None = 30.0,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or FontPipelineLogger()

    def _fetch(self, name: str) -> Any:
        url = f"{self.base_url}/{name}"
        self.logger.debug("Fetching %s", url)
        try:
            raw = fetch_bytes(url, timeout=self.timeout)
        except (urllib.error.URLError, OSError) as exc:
            raise DataSourceError(f"Unable to fetch '{url}': {exc}") from exc
        return _decode_json(raw, url)

    def list_blocks(self) -> list[BlockDescriptor]:
        return _parse_blocks(self._fetch(BLOCKS_DOCUMENT), BLOCKS_DOCUMENT)

    def load_block_support(self, block_id: int) -> Mapping[str, Any]:
        name = block_document_name(block_id)
        return _check_document(self._fetch(name), name)


class DirectorySource:
    """Read the same documents from a local mirror directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _read(self, name: str) -> Any:
        path = self.root / name
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DataSourceError(f"Unable to read '{path}': {exc}") from exc
        return _decode_json(raw, str(path))

    def list_blocks(self) -> list[BlockDescriptor]:
        return _parse_blocks(self._read(BLOCKS_DOCUMENT), str(self.root / BLOCKS_DOCUMENT))

    def load_block_support(self, block_id: int) -> Mapping[str, Any]:
        name = block_document_name(block_id)
        return _check_document(self._read(name), str(self.root / name))


class MemorySource:
    """Serve preloaded documents, e.g. a snapshot bundled by an application."""

    def __init__(
        self,
        blocks: Iterable[BlockDescriptor],
        documents: Mapping[int, Mapping[str, Any]] | None = None,
    ) -> None:
        self.blocks = list(blocks)
        self.documents = dict(documents or {})
        self.requests: list[int] = []

    def list_blocks(self) -> list[BlockDescriptor]:
        return list(self.blocks)

    def load_block_support(self, block_id: int) -> Mapping[str, Any]:
        self.requests.append(block_id)
        return self.documents.get(block_id, {})


class CachedSource:
    """Persist documents of another source under a ``FontCache`` namespace.

    Entries are written once and reused by later sessions; ``refresh`` forces
    the upstream source to be queried again.
    """

    def __init__(
        self,
        upstream: Any,
        *,
        cache: FontCache | None = None,
        namespace: str = "overview",
        refresh: bool = False,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.upstream = upstream
        self.cache = cache or FontCache()
        self.namespace = namespace
        self.refresh = refresh
        self.logger = logger or FontPipelineLogger()

    def _path(self, name: str) -> Path:
        return self.cache.path(self.namespace, name)

    def _load_cached(self, name: str) -> Any | None:
        path = self._path(name)
        if self.refresh or not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            self.logger.warning("Ignoring unreadable cache entry %s", path)
            return None

    def _store(self, name: str, payload: Any) -> None:
        path = self._path(name)
        try:
            path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        except OSError:
            self.logger.warning("Unable to write cache entry %s", path)

    def list_blocks(self) -> list[BlockDescriptor]:
        cached = self._load_cached(BLOCKS_DOCUMENT)
        if cached is not None:
            self.logger.debug("Block index loaded from %s", self._path(BLOCKS_DOCUMENT))
            return _parse_blocks(cached, BLOCKS_DOCUMENT)
        blocks = self.upstream.list_blocks()
        self._store(BLOCKS_DOCUMENT, [block.to_mapping() for block in blocks])
        return blocks

    def load_block_support(self, block_id: int) -> Mapping[str, Any]:
        name = block_document_name(block_id)
        cached = self._load_cached(name)
        if cached is not None:
            return _check_document(cached, name)
        document = self.upstream.load_block_support(block_id)
        self._store(name, dict(document))
        return document


def source_for(location: str | None, *, cache: FontCache | None = None, use_cache: bool = True):
    """Build a source from a URL, a directory path or ``None`` (notofonts)."""
    if location and not location.startswith(("http://", "https://")):
        return DirectorySource(Path(location).expanduser())
    source: Any = NotofontsSource(location or NOTOFONTS_OVERVIEW_URL)
    if use_cache:
        source = CachedSource(source, cache=cache)
    return source


__all__ = [
    "BLOCKS_DOCUMENT",
    "NOTOFONTS_OVERVIEW_URL",
    "BlockIndexSource",
    "BlockSupportSource",
    "CachedSource",
    "DirectorySource",
    "MemorySource",
    "NotofontsSource",
    "block_document_name",
    "source_for",
]
