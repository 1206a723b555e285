"""Widget that shows the filtered asset once the view first appears."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QImage, QPixmap, QResizeEvent, QShowEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QVBoxLayout, QWidget

from ....core.images import RenderedImage, SourceImage
from ....core.lifecycle import OnReadyHook
from ....core.pipeline import FilterSpec, try_apply_filter
from ....core.render import RenderContext
from ....errors import FilterError, SourceLoadFailedError
from ...displayable import DisplayableImage

_LOGGER = logging.getLogger(__name__)

SourceLoader = Callable[[], SourceImage]


class FilteredImageView(QWidget):
    """Display the result of the filter pipeline, scaled to fit.

    The view starts empty.  Its first ``showEvent`` fires an
    :class:`OnReadyHook` which loads the source, runs the pipeline and, on
    success, displays the result.  Failures leave the current (possibly
    empty) display untouched and are reported through :attr:`imageFailed`.
    """

    imageReady = Signal(QImage)
    """Emitted with the displayed frame after a successful pipeline run."""

    imageFailed = Signal(str)
    """Emitted with the failure kind when a pipeline run produced nothing."""

    def __init__(
        self,
        load_source: SourceLoader,
        spec: FilterSpec,
        *,
        context: Optional[RenderContext] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._load_source = load_source
        self._spec = spec
        self._context = context or RenderContext()
        self._displayable: Optional[DisplayableImage] = None
        self._pixmap: Optional[QPixmap] = None
        self._on_ready = OnReadyHook(self.load_image)

        self._label = QLabel(self)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        # Scaling is done manually in ``_update_scaled_pixmap`` so the aspect
        # ratio survives window resizes.
        self._label.setScaledContents(False)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._label)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def spec(self) -> FilterSpec:
        return self._spec

    def set_spec(self, spec: FilterSpec) -> None:
        """Use *spec* for the next :meth:`load_image` call."""

        self._spec = spec

    def displayable(self) -> Optional[DisplayableImage]:
        """Return the image currently on screen, if any."""

        return self._displayable

    def has_image(self) -> bool:
        return self._displayable is not None

    def load_image(self) -> None:
        """Run the pipeline once and display the result.

        Called by the on-ready hook; it may also be invoked directly to
        refresh the view.
        """

        try:
            source = self._load_source()
        except SourceLoadFailedError as exc:
            _LOGGER.warning("Source image unavailable (%s): %s", exc.kind, exc)
            self.imageFailed.emit(exc.kind)
            return

        rendered = try_apply_filter(
            source,
            self._spec,
            context=self._context,
            on_error=self._report_failure,
        )
        if rendered is not None:
            self.set_rendered(rendered)

    def set_rendered(self, rendered: RenderedImage) -> None:
        """Display *rendered*, replacing the previous frame."""

        self._displayable = DisplayableImage.from_rendered(rendered)
        self._pixmap = self._displayable.to_pixmap()
        self._update_scaled_pixmap()
        self.imageReady.emit(self._displayable.image)

    def sizeHint(self) -> QSize:  # noqa: N802 - Qt override
        if self._displayable is not None:
            return QSize(self._displayable.width, self._displayable.height)
        return QSize(400, 400)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def showEvent(self, event: QShowEvent) -> None:  # noqa: N802 - Qt override
        super().showEvent(event)
        self._on_ready.fire()

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self._update_scaled_pixmap()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _update_scaled_pixmap(self) -> None:
        if self._pixmap is None or self._pixmap.isNull():
            self._label.clear()
            return
        target = self._label.size()
        if target.width() <= 0 or target.height() <= 0:
            target = self._pixmap.size()
        scaled = self._pixmap.scaled(
            target,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._label.setPixmap(scaled)

    def _report_failure(self, error: FilterError) -> None:
        self.imageFailed.emit(error.kind)


__all__ = ["FilteredImageView"]
