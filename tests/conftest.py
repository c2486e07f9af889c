from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure local "src/" takes precedence over any globally-installed "maelnode" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)


@pytest.fixture(autouse=True)
def _reset_metrics():
    from maelnode.runtime import metrics

    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(autouse=True)
def _reset_logging():
    import logging

    yield
    lg = logging.getLogger("maelnode")
    lg.handlers = []
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
    if hasattr(lg, "_maelnode_configured"):
        delattr(lg, "_maelnode_configured")
