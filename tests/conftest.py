"""
Pytest configuration and fixtures for subtitle-linker tests.
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import subtitle_linker  # noqa: E402


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Create files (relative paths) under a fresh media directory and return it."""

    def _make(*relpaths: str, root_name: str = "media") -> Path:
        root = tmp_path / root_name
        root.mkdir(exist_ok=True)
        for rel in relpaths:
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text("x")
        return root

    return _make


@pytest.fixture
def cfg() -> subtitle_linker.LinkerCfg:
    """Default configuration without file logging."""
    base = subtitle_linker.load_config(None)
    return subtitle_linker.LinkerCfg(
        video_extensions=base.video_extensions,
        subtitle_extensions=base.subtitle_extensions,
        default_language=base.default_language,
        create_links=True,
        relative_links=True,
        log_dir=None,
    )
