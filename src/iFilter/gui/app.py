"""Application entry point: a single window showing the filtered asset."""

from __future__ import annotations

import logging
import sys
from functools import partial
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from ..config import FilterConfig, load_config
from ..core.images import load_asset
from ..core.render import RenderContext
from ..errors import IFilterError
from ..utils.logging import get_logger
from .ui.widgets.filtered_image_view import FilteredImageView

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top level window hosting :class:`FilteredImageView`."""

    def __init__(self, config: FilterConfig, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._config = config
        self.setWindowTitle(f"iFilter: {config.filter_name} ({config.amount:g})")
        self.view = FilteredImageView(
            partial(load_asset, config.asset),
            config.spec,
            context=RenderContext(config.max_render_pixels),
            parent=self,
        )
        self.setCentralWidget(self.view)
        self.resize(640, 640)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Create the application, show the window and run the event loop."""

    logger = get_logger()
    try:
        config = load_config()
    except IFilterError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    app = QApplication.instance() or QApplication(list(argv) if argv is not None else sys.argv)
    window = MainWindow(config)
    window.show()
    _LOGGER.info("Showing %s with %s", config.asset, config.spec)
    return app.exec()


__all__ = ["MainWindow", "main"]
