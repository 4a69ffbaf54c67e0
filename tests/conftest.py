"""Shared fixtures for scanner tests."""
import hashlib
import os
from pathlib import Path

import pytest

SCENARIO_CONTENT = {
    "a.jpg": b"0123456789",
    "b.png": b"abcdefghijklmnopqrst",
    "c.txt": b"hello",
    os.path.join("d", "e.gif"): b"GIF89a-fifteen!",
}


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    """a.jpg (10 B), b.png (20 B), c.txt (5 B) and d/e.gif (15 B)."""
    for rel_path, content in SCENARIO_CONTENT.items():
        target = tmp_path / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return tmp_path
