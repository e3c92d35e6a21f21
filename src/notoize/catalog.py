"""Block-granular cache of which variants support each code point."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Any

from notoize.blocks import BlockDescriptor, BlockIndex
from notoize.exceptions import DataSourceError
from notoize.logging import FontPipelineLogger
from notoize.scripts import ScriptClassifier, default_classifier
from notoize.sources import BlockSupportSource


def _font_list(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = value.get("fonts")
        if value is None:
            return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise DataSourceError(f"Expected a list of font variants, got {value!r}.")
    return tuple(str(item) for item in value)


def merge_block_support(
    block: BlockDescriptor, document: Mapping[str, Any]
) -> dict[int, tuple[str, ...]]:
    """Expand a block document into one entry per code point of ``block``.

    A code point uses its own ``cps`` override when present, else the
    block-wide ``fonts`` default, else no variant at all.
    """
    default = _font_list(document.get("fonts")) or ()
    overrides: dict[int, tuple[str, ...]] = {}
    for key, value in (document.get("cps") or {}).items():
        try:
            codepoint = int(key)
        except (TypeError, ValueError) as exc:
            raise DataSourceError(
                f"Block {block.id} has a non-decimal code point key {key!r}."
            ) from exc
        fonts = _font_list(value)
        if fonts is not None:
            overrides[codepoint] = fonts
    return {
        codepoint: overrides.get(codepoint, default)
        for codepoint in range(block.start, block.end + 1)
    }


class FontSupportCatalog:
    """Lazily populated ``codepoint -> variants`` map, loaded block by block.

    Each block is fetched at most once per catalog; merged entries are never
    invalidated. Candidates are kept raw: UI/Display filtering belongs to the
    resolver. Every literal is validated on ingestion so malformed data fails the
    load instead of a later resolution.
    """

    def __init__(
        self,
        index: BlockIndex,
        source: BlockSupportSource,
        *,
        classifier: ScriptClassifier | None = None,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.index = index
        self.source = source
        self.classifier = classifier or default_classifier()
        self.logger = logger or FontPipelineLogger()
        self._support: dict[int, tuple[str, ...]] = {}
        self._loaded: set[int] = set()
        self._lock = Lock()
        self._block_locks: dict[int, Lock] = {}

    @property
    def loaded_blocks(self) -> frozenset[int]:
        return frozenset(self._loaded)

    def _block_lock(self, block_id: int) -> Lock:
        with self._lock:
            return self._block_locks.setdefault(block_id, Lock())

    def ensure_loaded(self, block: BlockDescriptor) -> None:
        """Fetch, validate and merge ``block`` unless it is already cached."""
        if block.id in self._loaded:
            return
        with self._block_lock(block.id):
            if block.id in self._loaded:
                return
            document = self.source.load_block_support(block.id)
            merged = merge_block_support(block, document)
            seen: set[str] = set()
            for variants in merged.values():
                seen.update(variants)
            self.classifier.validate(sorted(seen), block_id=block.id)
            with self._lock:
                self._support.update(merged)
                self._loaded.add(block.id)
            self.logger.debug(
                "Block %s (%s) loaded with %d variants.", block.id, block.name, len(seen)
            )

    def prefetch(self, blocks: Iterable[BlockDescriptor], *, workers: int = 4) -> None:
        """Load several blocks up-front, fetching them concurrently."""
        pending = [block for block in dict.fromkeys(blocks) if block.id not in self._loaded]
        if not pending:
            return
        if workers <= 1 or len(pending) == 1:
            for block in pending:
                self.ensure_loaded(block)
            return
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # list() re-raises the first failure
            list(executor.map(self.ensure_loaded, pending))

    def get(self, codepoint: int) -> tuple[str, ...]:
        """Return the raw variants supporting ``codepoint``, loading its block."""
        if codepoint in self._support:
            return self._support[codepoint]
        block = self.index.lookup(codepoint)
        if block is None:
            return ()
        self.ensure_loaded(block)
        return self._support.get(codepoint, ())


__all__ = ["FontSupportCatalog", "merge_block_support"]
