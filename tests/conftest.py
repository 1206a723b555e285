import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iFilter.core.images import SourceImage  # noqa: E402


def make_test_pattern(width: int = 100, height: int = 100) -> np.ndarray:
    """Return an opaque RGBA pattern whose pixels vary along both axes."""

    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = (xs * 255 // max(1, width - 1)).astype(np.uint8)
    pixels[..., 1] = (ys * 255 // max(1, height - 1)).astype(np.uint8)
    pixels[..., 2] = np.where(((xs // 10) + (ys // 10)) % 2 == 0, 40, 220).astype(np.uint8)
    pixels[..., 3] = 255
    return pixels


@pytest.fixture
def pattern() -> SourceImage:
    """100x100 test pattern wrapped as a source image."""

    return SourceImage(make_test_pattern(), name="pattern")
