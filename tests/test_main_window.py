"""Tests for the main window, run on Qt's offscreen platform."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from unittest.mock import MagicMock  # noqa: E402

import numpy as np  # noqa: E402
import pytest  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from digitcam.reader import DigitReader, ReadResult  # noqa: E402
from digitcam.ui import app as ui_app  # noqa: E402
from digitcam.ui.main_window import MainWindow  # noqa: E402


@pytest.fixture(scope="module")
def qapp() -> QApplication:
    return QApplication.instance() or QApplication([])


@pytest.fixture
def reader() -> MagicMock:
    mock = MagicMock(spec=DigitReader)
    mock.threshold = 150
    mock.capture.return_value = None
    mock.binarize_and_recognize.return_value = ReadResult(
        binary=np.zeros((100, 400, 3), dtype=np.uint8), text="1234"
    )
    return mock


class TestPreview:
    def test_keeps_aspect_ratio(self, qapp, reader):
        window = MainWindow(reader)
        window._preview.resize(300, 300)
        window.refresh()

        pixmap = window._preview.pixmap()
        assert (pixmap.width(), pixmap.height()) == (300, 75)

    def test_shows_recognized_text(self, qapp, reader):
        window = MainWindow(reader)
        window.refresh()
        assert window._result_text.text() == "1234"

    def test_shows_recognition_error(self, qapp, reader):
        reader.binarize_and_recognize.return_value = ReadResult(
            binary=np.zeros((10, 10, 3), dtype=np.uint8), error="RecognitionError: boom"
        )
        window = MainWindow(reader)
        window.refresh()
        assert window._result_text.text() == "RecognitionError: boom"

    def test_nothing_captured_leaves_preview_empty(self, qapp, reader):
        reader.binarize_and_recognize.return_value = None
        window = MainWindow(reader)
        window.refresh()
        assert window._result_text.text() == ""


class TestControls:
    def test_slider_sets_threshold_and_refreshes(self, qapp, reader):
        window = MainWindow(reader)
        window._threshold_bar.setValue(90)
        reader.set_threshold.assert_called_once_with(90)
        reader.binarize_and_recognize.assert_called_once()

    def test_capture_error_shown(self, qapp, reader):
        reader.capture.return_value = "CaptureError: Cannot open camera 0"
        window = MainWindow(reader)
        window._on_capture()
        assert window._result_text.text() == "CaptureError: Cannot open camera 0"
        reader.binarize_and_recognize.assert_not_called()


def test_app_logger_follows_module_name():
    assert ui_app.logger.name == "digitcam.ui.app"
