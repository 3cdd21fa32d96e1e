"""DigitCamApplication: bootstraps trained data and runs the Qt window."""

from __future__ import annotations

import logging
import sys
from typing import Any

from PyQt6.QtWidgets import QApplication, QMessageBox

from digitcam.ocr.tessdata import TrainedDataError
from digitcam.reader import bootstrap_trained_data, build_reader, format_error
from digitcam.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


class DigitCamApplication:
    """Owns the QApplication and the main window."""

    def __init__(self, config: dict[str, Any]) -> None:
        self._config = config

    def run(self) -> int:
        """Entry point. Must be called from the main thread.

        Returns the application exit code.
        """
        app = QApplication(sys.argv)

        try:
            bootstrap_trained_data(self._config)
        except TrainedDataError as e:
            # Recognition will fail until the data is installed, but capture still works
            logger.error("Trained data bootstrap failed: %s", e)
            QMessageBox.warning(None, "DigitCam", format_error(e))

        reader = build_reader(self._config)
        window = MainWindow(reader)
        window.show()

        return app.exec()
