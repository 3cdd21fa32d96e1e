"""Main window: capture button, threshold slider, binary preview, result field."""

from __future__ import annotations

import logging

import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from digitcam.config import THRESHOLD_MAX, THRESHOLD_MIN
from digitcam.reader import DigitReader

logger = logging.getLogger(__name__)


class MainWindow(QWidget):
    """Single-screen UI driving a DigitReader."""

    def __init__(self, reader: DigitReader, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._reader = reader
        self._preview_pixmap: QPixmap | None = None

        self.setWindowTitle("DigitCam")
        self.setMinimumSize(480, 420)

        layout = QVBoxLayout(self)

        self._capture_btn = QPushButton("Capture")
        self._capture_btn.clicked.connect(self._on_capture)
        layout.addWidget(self._capture_btn)

        # --- Threshold ---
        slider_row = QHBoxLayout()
        slider_row.addWidget(QLabel("Threshold:"))
        self._threshold_bar = QSlider(Qt.Orientation.Horizontal)
        self._threshold_bar.setRange(THRESHOLD_MIN, THRESHOLD_MAX)
        self._threshold_bar.setValue(reader.threshold)
        slider_row.addWidget(self._threshold_bar, stretch=1)
        self._threshold_label = QLabel(str(reader.threshold))
        self._threshold_label.setMinimumWidth(30)
        slider_row.addWidget(self._threshold_label)
        layout.addLayout(slider_row)

        # Connect after setValue so the initial value doesn't trigger OCR
        self._threshold_bar.valueChanged.connect(self._on_threshold_changed)

        # --- Preview ---
        self._preview = QLabel("No capture yet")
        self._preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview.setMinimumHeight(240)
        # Ignored policy lets the window shrink below the pixmap size
        self._preview.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        layout.addWidget(self._preview, stretch=1)

        # --- Result ---
        self._result_text = QLineEdit()
        self._result_text.setPlaceholderText("Recognized digits")
        layout.addWidget(self._result_text)

    def _on_capture(self) -> None:
        error = self._reader.capture()
        if error is not None:
            self._result_text.setText(error)
            return
        self.refresh()

    def _on_threshold_changed(self, value: int) -> None:
        self._reader.set_threshold(value)
        self._threshold_label.setText(str(self._reader.threshold))
        self.refresh()

    def refresh(self) -> None:
        """Re-run binarization and recognition and update the widgets."""
        result = self._reader.binarize_and_recognize()
        if result is None:
            return

        self._preview_pixmap = self._to_pixmap(result.binary)
        self._show_preview()
        self._result_text.setText(result.text if result.ok else result.error)

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        self._show_preview()

    def _show_preview(self) -> None:
        """Fit the last binary image into the preview, keeping its aspect ratio."""
        if self._preview_pixmap is None:
            return
        self._preview.setPixmap(
            self._preview_pixmap.scaled(
                self._preview.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.FastTransformation,
            )
        )

    @staticmethod
    def _to_pixmap(frame: np.ndarray) -> QPixmap:
        """Convert a BGR numpy array to a QPixmap."""
        h, w = frame.shape[:2]
        if frame.ndim == 3 and frame.shape[2] >= 3:
            rgb = frame[:, :, :3][:, :, ::-1].copy()
            qimg = QImage(rgb.data, w, h, w * 3, QImage.Format.Format_RGB888)
        else:
            gray = frame.copy()
            qimg = QImage(gray.data, w, h, w, QImage.Format.Format_Grayscale8)
        # QImage doesn't own the buffer; copy before the array goes out of scope
        return QPixmap.fromImage(qimg.copy())
