from __future__ import annotations

import pytest

from notoize.blocks import BlockDescriptor, BlockIndex
from notoize.exceptions import BlockIndexError


def _index() -> BlockIndex:
    return BlockIndex(
        [
            BlockDescriptor(id=2, start=0x0600, end=0x06FF, name="Arabic"),
            BlockDescriptor(id=0, start=0x0000, end=0x007F, name="Basic Latin"),
            BlockDescriptor(id=1, start=0x0080, end=0x00FF, name="Latin-1 Supplement"),
        ]
    )


def test_lookup_hits_block_boundaries() -> None:
    index = _index()
    assert index.lookup(0x0000).name == "Basic Latin"
    assert index.lookup(0x007F).name == "Basic Latin"
    assert index.lookup(0x0080).name == "Latin-1 Supplement"
    assert index.lookup(0x0600).name == "Arabic"
    assert index.lookup(0x06FF).name == "Arabic"


def test_lookup_returns_none_in_gaps_and_past_the_end() -> None:
    index = _index()
    assert index.lookup(0x0100) is None
    assert index.lookup(0x05FF) is None
    assert index.lookup(0x0700) is None
    assert index.lookup(0x10FFFF) is None


def test_blocks_are_sorted_by_start() -> None:
    assert [block.id for block in _index()] == [0, 1, 2]
    assert len(_index()) == 3


def test_overlapping_blocks_are_rejected() -> None:
    with pytest.raises(BlockIndexError, match="overlap"):
        BlockIndex(
            [
                BlockDescriptor(id=0, start=0x00, end=0x7F, name="A"),
                BlockDescriptor(id=1, start=0x70, end=0xFF, name="B"),
            ]
        )


def test_inverted_range_and_duplicate_ids_are_rejected() -> None:
    with pytest.raises(BlockIndexError, match="invalid range"):
        BlockIndex([BlockDescriptor(id=0, start=0x80, end=0x7F, name="A")])
    with pytest.raises(BlockIndexError, match="unique"):
        BlockIndex(
            [
                BlockDescriptor(id=0, start=0x00, end=0x7F, name="A"),
                BlockDescriptor(id=0, start=0x80, end=0xFF, name="B"),
            ]
        )


def test_blocks_for_groups_codepoints_and_gaps() -> None:
    index = _index()
    grouped = index.blocks_for([0x41, 0x0627, 0x42, 0x0400])
    assert grouped[index.get(0)] == [0x41, 0x42]
    assert grouped[index.get(2)] == [0x0627]
    assert grouped[None] == [0x0400]


def test_from_payload_accepts_overview_entries() -> None:
    index = BlockIndex.from_payload(
        [{"ix": 7, "start": 0x0E00, "end": 0x0E7F, "name": "Thai"}, {"id": 3, "start": 0, "end": 5}]
    )
    thai = index.get(7)
    assert thai is not None
    assert 0x0E01 in thai
    assert len(thai) == 0x80
    assert thai.to_mapping() == {"ix": 7, "start": 0x0E00, "end": 0x0E7F, "name": "Thai"}
    assert index.get(3).name == ""


def test_from_payload_requires_an_id() -> None:
    with pytest.raises(BlockIndexError):
        BlockIndex.from_payload([{"start": 0, "end": 5}])


def test_every_codepoint_of_a_block_resolves_to_it(memory_source) -> None:
    index = BlockIndex(memory_source.list_blocks())
    for block in index:
        for codepoint in range(block.start, block.end + 1):
            assert index.lookup(codepoint) == block
