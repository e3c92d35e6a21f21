from __future__ import annotations

import json
from pathlib import Path

import pytest

from notoize.blocks import BlockDescriptor
import notoize.cli.state as cli_state
from notoize.client import NotoizeClient
from notoize.sources import BLOCKS_DOCUMENT, MemorySource, block_document_name


BLOCKS = [
    BlockDescriptor(id=0, start=0x0000, end=0x007F, name="Basic Latin"),
    BlockDescriptor(id=1, start=0x0590, end=0x05FF, name="Hebrew"),
    BlockDescriptor(id=2, start=0x0600, end=0x06FF, name="Arabic"),
    BlockDescriptor(id=3, start=0x0E00, end=0x0E7F, name="Thai"),
    BlockDescriptor(id=4, start=0x2200, end=0x22FF, name="Mathematical Operators"),
    BlockDescriptor(id=5, start=0x4E00, end=0x9FFF, name="CJK Unified Ideographs"),
]

SPACE_FONTS = [
    "Sans",
    "Serif",
    "Sans Mono",
    "Sans Arabic",
    "Naskh Arabic",
    "Sans Hebrew",
    "Serif Hebrew",
    "Sans Thai",
    "Sans CJK SC",
]

DOCUMENTS = {
    0: {
        "fonts": ["Sans", "Serif", "Sans Mono"],
        "cps": {
            "32": {"fonts": SPACE_FONTS},
            "64": {"fonts": ["Sans", "Sans CJK SC"]},
            "127": {"fonts": []},
        },
    },
    1: {"fonts": ["Sans Hebrew", "Serif Hebrew", "Rashi Hebrew"]},
    2: {
        "fonts": [
            "Sans Arabic",
            "Kufi Arabic",
            "Naskh Arabic",
            "Naskh Arabic UI",
            "Nastaliq Urdu",
            "Sans Arabic UI",
        ],
        "cps": {"1548": {"fonts": ["Sans Arabic", "Naskh Arabic", "Sans Syriac"]}},
    },
    3: {
        "fonts": ["Sans Thai", "Sans Thai Looped", "Serif Thai", "Sans Thai UI"],
        "cps": {"3647": {"fonts": ["Serif Thai"]}},
    },
    4: {"fonts": ["Sans Math", "Sans Symbols"]},
    5: {"fonts": ["Sans CJK JP", "Sans CJK SC", "Serif CJK SC", "Sans Mono CJK SC"]},
}


@pytest.fixture(autouse=True)
def _isolated_cache(tmp_path_factory, monkeypatch):
    monkeypatch.setenv("NOTOIZE_CACHE_DIR", str(tmp_path_factory.mktemp("cache")))


@pytest.fixture(autouse=True)
def _fresh_cli_state():
    token = cli_state._STATE_VAR.set(None)
    yield
    cli_state._STATE_VAR.reset(token)


@pytest.fixture
def memory_source() -> MemorySource:
    return MemorySource(BLOCKS, DOCUMENTS)


@pytest.fixture
def client(memory_source: MemorySource) -> NotoizeClient:
    return NotoizeClient(memory_source, prefetch_workers=1)


@pytest.fixture
def mirror(tmp_path: Path) -> Path:
    """Write the sample documents the way the notofonts overview lays them out."""
    root = tmp_path / "overview"
    root.mkdir()
    (root / BLOCKS_DOCUMENT).write_text(
        json.dumps([block.to_mapping() for block in BLOCKS]), encoding="utf-8"
    )
    for block_id, document in DOCUMENTS.items():
        (root / block_document_name(block_id)).write_text(json.dumps(document), encoding="utf-8")
    return root
