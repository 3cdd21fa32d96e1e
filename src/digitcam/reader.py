"""Reader controller: captured frame + threshold -> binary preview + digits."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from digitcam.capture.camera_capture import CameraCapture, CaptureError, load_captured_image
from digitcam.config import clamp_threshold, resolve_path
from digitcam.ocr.binarizer import binarize_image
from digitcam.ocr.recognizer import DigitRecognizer, RecognitionError
from digitcam.ocr.tessdata import ensure_trained_data

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 150


def format_error(error: Exception) -> str:
    """Render an exception as a message for the user."""
    return f"{type(error).__name__}: {error}"


@dataclass
class ReadResult:
    """Outcome of one binarize-and-recognize pass."""

    binary: np.ndarray = field(repr=False)
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DigitReader:
    """Holds the current frame and threshold and runs the OCR pass on demand.

    Args:
        recognizer: Configured digit recognizer.
        capture: Camera used by capture(). None disables capturing.
        threshold: Initial binarization threshold, clamped to [0, 255].
    """

    def __init__(
        self,
        recognizer: DigitRecognizer,
        capture: CameraCapture | None = None,
        threshold: int = DEFAULT_THRESHOLD,
    ) -> None:
        self.recognizer = recognizer
        self.camera = capture
        self._threshold = clamp_threshold(threshold)
        self._frame: np.ndarray | None = None

    @property
    def threshold(self) -> int:
        return self._threshold

    def set_threshold(self, value: int) -> None:
        self._threshold = clamp_threshold(value)

    @property
    def frame(self) -> np.ndarray | None:
        return self._frame

    def load_frame(self, frame: np.ndarray) -> None:
        """Replace the current frame."""
        self._frame = frame

    def load_file(self, path: Path) -> None:
        """Decode an image file and make it the current frame.

        Raises:
            CaptureError: If the file cannot be decoded.
        """
        self._frame = load_captured_image(path)
        logger.info("Loaded %s (%dx%d)", path, self._frame.shape[1], self._frame.shape[0])

    def capture(self) -> str | None:
        """Take a photo and make it the current frame.

        Returns:
            None on success, otherwise a message describing the failure.
        """
        if self.camera is None:
            return "CaptureError: no camera configured"
        try:
            path = self.camera.capture()
            self.load_file(path)
        except CaptureError as e:
            logger.warning("Capture failed: %s", e)
            return format_error(e)
        return None

    def binarize_and_recognize(self) -> ReadResult | None:
        """Binarize the current frame and run OCR on it.

        Returns:
            None if nothing has been captured yet, otherwise a ReadResult.
            Recognition failures are reported in ReadResult.error.
        """
        if self._frame is None:
            return None

        binary = binarize_image(self._frame, self._threshold)
        try:
            text = self.recognizer.recognize(binary)
        except RecognitionError as e:
            logger.exception("Recognition failed")
            return ReadResult(binary=binary, error=format_error(e))

        return ReadResult(binary=binary, text=text)


def bootstrap_trained_data(config: dict[str, Any]) -> Path:
    """Install the configured trained data into the learn directory.

    Raises:
        TrainedDataError: If the asset is missing or cannot be copied.
    """
    ocr = config["ocr"]
    asset = resolve_path(ocr["asset_path"]) if ocr["asset_path"] else None
    return ensure_trained_data(
        resolve_path(ocr["learn_data_dir"]),
        asset_path=asset,
        language=ocr["language"],
    )


def build_reader(config: dict[str, Any]) -> DigitReader:
    """Wire a DigitReader from a loaded config."""
    ocr = config["ocr"]
    recognizer = DigitRecognizer(
        learn_data_dir=resolve_path(ocr["learn_data_dir"]),
        language=ocr["language"],
        char_whitelist=ocr["char_whitelist"],
        tesseract_cmd=ocr["tesseract_cmd"] or None,
        page_seg_mode=ocr["page_seg_mode"] or None,
    )
    camera = CameraCapture(
        device_index=config["capture"]["device_index"],
        output_path=resolve_path(config["capture"]["output_path"]),
        warmup_frames=config["capture"]["warmup_frames"],
    )
    return DigitReader(
        recognizer,
        capture=camera,
        threshold=config["binarize"]["threshold"],
    )
