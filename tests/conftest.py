"""Shared pytest fixtures for palette tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path: Path):
    """Factory writing a PNG made of vertical color stripes.

    Each stripe is ``(rgb, width)``; the image is 10 pixels tall.
    """

    def _make(stripes: list[tuple[tuple[int, int, int], int]], name: str = "stripes.png") -> Path:
        columns = []
        for rgb, width in stripes:
            columns.append(np.tile(np.array(rgb, dtype=np.uint8), (10, width, 1)))
        pixels = np.concatenate(columns, axis=1)
        path = tmp_path / name
        Image.fromarray(pixels).save(path)
        return path

    return _make


@pytest.fixture
def seed_set() -> list[str]:
    """A typical five-color seed set."""
    return ["#1f3b73", "#e4572e", "#f3a712", "#a8c686", "#669bbc"]
