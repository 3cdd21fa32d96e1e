"""Digit recognition through the Tesseract OCR engine."""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np
import pytesseract

from digitcam.ocr.tessdata import tessdata_dir

logger = logging.getLogger(__name__)

DIGIT_WHITELIST = "0123456789"


class RecognitionError(Exception):
    """Raised when the OCR engine fails on an image."""


class DigitRecognizer:
    """Runs Tesseract restricted to a character whitelist.

    Args:
        learn_data_dir: Directory containing ``tessdata/<language>.traineddata``.
        language: Tesseract language code.
        char_whitelist: Characters the engine is allowed to emit.
        tesseract_cmd: Path to the tesseract executable. None uses PATH.
        page_seg_mode: Tesseract ``--psm`` value. None or 0 keeps the default.
    """

    def __init__(
        self,
        learn_data_dir: Path,
        language: str = "jpn",
        char_whitelist: str = DIGIT_WHITELIST,
        tesseract_cmd: str | None = None,
        page_seg_mode: int | None = None,
    ) -> None:
        self.learn_data_dir = Path(learn_data_dir)
        self.language = language
        self.char_whitelist = char_whitelist
        self.page_seg_mode = page_seg_mode or None

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
            logger.info("Using Tesseract executable at: %s", tesseract_cmd)

    @property
    def tesseract_config(self) -> str:
        parts = [f'--tessdata-dir "{tessdata_dir(self.learn_data_dir)}"']
        if self.page_seg_mode is not None:
            parts.append(f"--psm {self.page_seg_mode}")
        if self.char_whitelist:
            parts.append(f"-c tessedit_char_whitelist={self.char_whitelist}")
        return " ".join(parts)

    @staticmethod
    def _to_rgb(image: np.ndarray) -> np.ndarray:
        """Convert an OpenCV image to a fresh RGB buffer for the engine."""
        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGB)
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

    def recognize(self, image: np.ndarray) -> str:
        """Recognize text in an image.

        Args:
            image: BGR, BGRA or grayscale uint8 image, typically binarized.

        Returns:
            Recognized text with surrounding whitespace stripped.

        Raises:
            RecognitionError: If Tesseract is missing or fails.
        """
        if image is None or image.size == 0:
            raise RecognitionError("Cannot recognize an empty image")

        rgb = self._to_rgb(image)
        try:
            text = pytesseract.image_to_string(
                rgb,
                lang=self.language,
                config=self.tesseract_config,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise RecognitionError(f"Tesseract is not installed or not on PATH: {e}") from e
        except (pytesseract.TesseractError, OSError) as e:
            raise RecognitionError(str(e)) from e

        text = text.strip()
        logger.debug("Recognized %r", text)
        return text
