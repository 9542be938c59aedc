# tests/unit/test_packaging.py
from __future__ import annotations

import re
from pathlib import Path


def test_mcp_pinned_below_2():
    """Logging comes from mcp.server.fastmcp, which only exists in the 1.x line."""
    root = Path(__file__).resolve().parents[2]
    text = (root / "pyproject.toml").read_text(encoding="utf-8")

    pins = re.findall(r'"mcp([^"]*)"', text)
    assert pins, "mcp must be declared as a dependency"
    assert all("<2" in spec for spec in pins)
