"""Unicode block descriptors and a binary-search block index."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from notoize.exceptions import BlockIndexError


MAX_CODEPOINT = 0x10FFFF


@dataclass(frozen=True, slots=True)
class BlockDescriptor:
    """A contiguous, named range of code points sharing one support document."""

    id: int
    start: int
    end: int
    name: str

    def __contains__(self, codepoint: object) -> bool:
        return isinstance(codepoint, int) and self.start <= codepoint <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BlockDescriptor:
        """Build a descriptor from a ``blocks.json`` entry (``ix`` or ``id`` keys)."""
        raw_id = data.get("ix", data.get("id"))
        if raw_id is None:
            raise BlockIndexError(f"Block entry without an id: {dict(data)!r}")
        return cls(
            id=int(raw_id),
            start=int(data["start"]),
            end=int(data["end"]),
            name=str(data.get("name", "")),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {"ix": self.id, "start": self.start, "end": self.end, "name": self.name}


class BlockIndex:
    """Ordered table of non-overlapping blocks with ``O(log n)`` lookups."""

    def __init__(self, blocks: Iterable[BlockDescriptor]) -> None:
        ordered = tuple(sorted(blocks, key=lambda block: block.start))
        previous: BlockDescriptor | None = None
        for block in ordered:
            if block.start > block.end or block.end > MAX_CODEPOINT or block.start < 0:
                raise BlockIndexError(
                    f"Block {block.id} '{block.name}' has an invalid range "
                    f"U+{block.start:04X}..U+{block.end:04X}."
                )
            if previous is not None and block.start <= previous.end:
                raise BlockIndexError(
                    f"Blocks '{previous.name}' and '{block.name}' overlap at U+{block.start:04X}."
                )
            previous = block
        self._blocks = ordered
        self._starts = tuple(block.start for block in ordered)
        self._by_id = {block.id: block for block in ordered}
        if len(self._by_id) != len(ordered):
            raise BlockIndexError("Block ids must be unique.")

    def __iter__(self) -> Iterator[BlockDescriptor]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def lookup(self, codepoint: int) -> BlockDescriptor | None:
        """Return the block owning ``codepoint`` or ``None`` inside a gap."""
        idx = bisect_right(self._starts, codepoint) - 1
        if idx < 0:
            return None
        block = self._blocks[idx]
        if codepoint > block.end:
            return None
        return block

    def get(self, block_id: int) -> BlockDescriptor | None:
        return self._by_id.get(block_id)

    def blocks_for(self, codepoints: Iterable[int]) -> dict[BlockDescriptor | None, list[int]]:
        """Group code points by owning block, preserving their order."""
        grouped: dict[BlockDescriptor | None, list[int]] = {}
        for codepoint in codepoints:
            grouped.setdefault(self.lookup(codepoint), []).append(codepoint)
        return grouped

    @classmethod
    def from_payload(cls, payload: Iterable[Mapping[str, Any]]) -> BlockIndex:
        return cls(BlockDescriptor.from_mapping(entry) for entry in payload)


__all__ = ["MAX_CODEPOINT", "BlockDescriptor", "BlockIndex"]
