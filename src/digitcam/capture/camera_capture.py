"""Camera capture using OpenCV."""

import logging
from pathlib import Path

import cv2
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = Path.home() / ".digitcam" / "tmp_ocr.jpg"


class CaptureError(Exception):
    """Raised when a photo cannot be taken or decoded."""


class CameraCapture:
    """Takes a single photo from a camera and stores it at a fixed path.

    Args:
        device_index: OpenCV camera index.
        output_path: File the captured photo is written to (overwritten on each capture).
        warmup_frames: Frames to discard before the real shot so exposure can settle.
    """

    def __init__(
        self,
        device_index: int = 0,
        output_path: Path = DEFAULT_OUTPUT_PATH,
        warmup_frames: int = 5,
    ) -> None:
        self.device_index = device_index
        self.output_path = Path(output_path)
        self.warmup_frames = warmup_frames

    def capture(self) -> Path:
        """Capture one frame and write it to ``output_path``.

        Returns:
            The path the photo was written to.

        Raises:
            CaptureError: If the camera cannot be opened, read, or the file written.
        """
        cap = cv2.VideoCapture(self.device_index)
        try:
            if not cap.isOpened():
                raise CaptureError(f"Cannot open camera {self.device_index}")

            for _ in range(self.warmup_frames):
                cap.read()

            ret, frame = cap.read()
            if not ret or frame is None:
                raise CaptureError(f"Camera {self.device_index} returned no frame")
        finally:
            cap.release()

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            written = cv2.imwrite(str(self.output_path), frame)
        except (OSError, cv2.error) as e:
            raise CaptureError(f"Failed to write capture to {self.output_path}: {e}") from e
        if not written:
            raise CaptureError(f"Failed to write capture to {self.output_path}")

        logger.info(
            "Captured %dx%d frame to %s", frame.shape[1], frame.shape[0], self.output_path
        )
        return self.output_path


def load_captured_image(path: Path) -> np.ndarray:
    """Decode an image file into a BGR array.

    Raises:
        CaptureError: If the file is missing or not a decodable image.
    """
    path = Path(path)
    if not path.is_file():
        raise CaptureError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise CaptureError(f"Cannot decode image: {path}")
    return image
