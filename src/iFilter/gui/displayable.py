"""Bridge rendered buffers into Qt image types."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PySide6.QtGui import QImage, QPixmap

from ..core.images import RenderedImage


@dataclass(frozen=True)
class DisplayableImage:
    """Presentation wrapper around a :class:`RenderedImage`.

    The wrapped ``QImage`` owns a detached copy of the pixels, so it stays
    valid after the rendered buffer is released.
    """

    image: QImage

    @classmethod
    def from_rendered(cls, rendered: RenderedImage) -> "DisplayableImage":
        pixels = np.ascontiguousarray(rendered.pixels)
        height, width = pixels.shape[:2]
        data = pixels.tobytes()
        # ``QImage`` does not copy *data*; ``copy()`` detaches it before ``data``
        # goes out of scope.
        wrapped = QImage(data, width, height, width * 4, QImage.Format.Format_RGBA8888)
        return cls(wrapped.copy())

    @property
    def width(self) -> int:
        return self.image.width()

    @property
    def height(self) -> int:
        return self.image.height()

    def to_pixmap(self) -> QPixmap:
        return QPixmap.fromImage(self.image)


__all__ = ["DisplayableImage"]
