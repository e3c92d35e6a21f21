"""Session object tying the block index, the catalog and the resolver together."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from notoize.blocks import MAX_CODEPOINT, BlockIndex
from notoize.cache import FontCache
from notoize.catalog import FontSupportCatalog
from notoize.config import StyleConfiguration, parse_style_config
from notoize.diagnostics import Issue, UnsupportedCodePoint
from notoize.logging import FontPipelineLogger
from notoize.resolver import Resolver, Selection
from notoize.scripts import ScriptClassifier, default_classifier
from notoize.sources import BlockIndexSource, BlockSupportSource, source_for
from notoize.stack import FontStack, assemble


_SURROGATES = range(0xD800, 0xE000)


def codepoints(text: str | Iterable[int]) -> list[int]:
    """Return the sorted, distinct scalar values of ``text``.

    Surrogates are dropped; integers outside the Unicode range raise ``ValueError``.
    """
    values = (ord(char) for char in text) if isinstance(text, str) else text
    unique: set[int] = set()
    for value in values:
        value = int(value)
        if not 0 <= value <= MAX_CODEPOINT:
            raise ValueError(f"Code point {value:#x} is outside the Unicode range.")
        if value in _SURROGATES:
            continue
        unique.add(value)
    return sorted(unique)


class NotoizeClient:
    """Resolve font stacks against one block index and support catalog.

    The block list is fetched once, when the client is built. Block support
    documents are fetched on demand and kept for the lifetime of the client, so
    reuse one client for many calls.
    """

    def __init__(
        self,
        source: Any | None = None,
        *,
        index_source: BlockIndexSource | None = None,
        support_source: BlockSupportSource | None = None,
        cache: FontCache | None = None,
        use_cache: bool = True,
        classifier: ScriptClassifier | None = None,
        logger: FontPipelineLogger | None = None,
        reuse_selected: bool = True,
        prefetch_workers: int = 4,
    ) -> None:
        if source is None and (index_source is None or support_source is None):
            source = source_for(None, cache=cache, use_cache=use_cache)
        self.logger = logger or FontPipelineLogger()
        self.classifier = classifier or default_classifier()
        self.index = BlockIndex((index_source or source).list_blocks())
        self.catalog = FontSupportCatalog(
            self.index,
            support_source or source,
            classifier=self.classifier,
            logger=self.logger,
        )
        self.resolver = Resolver(self.classifier, reuse_selected=reuse_selected)
        self.prefetch_workers = prefetch_workers

    def notoize(self, text: str | Iterable[int], config: Any = None) -> FontStack:
        """Return the minimal stack of variants covering ``text``.

        ``config`` accepts anything ``parse_style_config`` does. Catalog
        integrity errors propagate; per-code-point problems are reported on
        ``FontStack.issues``.
        """
        style = parse_style_config(config)
        points = codepoints(text)
        by_block = self.index.blocks_for(points)
        self.catalog.prefetch(
            [block for block in by_block if block is not None],
            workers=self.prefetch_workers,
        )

        selections: dict[int, Selection] = {}
        selected: dict[str, None] = {}
        deferred: list[tuple[int, tuple[str, ...]]] = []

        for codepoint in points:
            if self.index.lookup(codepoint) is None:
                selections[codepoint] = Selection(
                    codepoint, (), (UnsupportedCodePoint(codepoint, reason="no-block"),)
                )
                continue
            candidates = self.catalog.get(codepoint)
            if candidates and self.resolver.is_multi_script(candidates, style):
                deferred.append((codepoint, candidates))
                continue
            selections[codepoint] = self._select(codepoint, candidates, style, selected)

        for codepoint, candidates in deferred:
            selections[codepoint] = self._select(codepoint, candidates, style, selected)

        ordered = [selections[codepoint] for codepoint in points]
        issues: list[Issue] = [issue for selection in ordered for issue in selection.issues]
        stack = assemble(((item.codepoint, item.variants) for item in ordered), issues)
        self.logger.debug(
            "Resolved %d code points to %d families (%d issues).",
            len(points),
            len(stack.names),
            len(issues),
        )
        return stack

    def _select(
        self,
        codepoint: int,
        candidates: tuple[str, ...],
        style: StyleConfiguration,
        selected: dict[str, None],
    ) -> Selection:
        selection = self.resolver.select(codepoint, candidates, style, selected.keys())
        for name in selection.variants:
            selected.setdefault(name, None)
        return selection


def resolve(
    text: str | Iterable[int],
    config: Any = None,
    *,
    client: NotoizeClient | None = None,
) -> FontStack:
    """Resolve ``text`` with ``client``, or with a fresh notofonts-backed one."""
    return (client or NotoizeClient()).notoize(text, config)


__all__ = ["NotoizeClient", "codepoints", "resolve"]
