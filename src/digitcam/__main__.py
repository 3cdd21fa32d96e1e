"""Entry point for DigitCam."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import cv2

from digitcam.capture.camera_capture import CaptureError
from digitcam.config import load_config
from digitcam.ocr.tessdata import TrainedDataError
from digitcam.reader import bootstrap_trained_data, build_reader

logger = logging.getLogger("digitcam")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="digitcam",
        description="Capture a photo, binarize it and read the digits with Tesseract.",
    )
    parser.add_argument("--config", default="config.toml", help="Path to the TOML config file")
    parser.add_argument(
        "--image",
        help="Process this image file headlessly instead of opening the window",
    )
    parser.add_argument("--threshold", type=int, help="Binarization threshold (0-255)")
    parser.add_argument("--save-binary", help="Write the binarized image here (headless mode)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run_headless(
    config: dict[str, Any],
    image_path: str,
    save_binary: str | None = None,
) -> int:
    """Read digits from an image file and print them to stdout.

    Returns the process exit code.
    """
    try:
        bootstrap_trained_data(config)
    except TrainedDataError as e:
        logger.error("Trained data bootstrap failed: %s", e)
        return 1

    reader = build_reader(config)
    try:
        reader.load_file(image_path)
    except CaptureError as e:
        logger.error("%s", e)
        return 1

    result = reader.binarize_and_recognize()
    if save_binary:
        try:
            written = cv2.imwrite(save_binary, result.binary)
        except cv2.error as e:
            logger.error("Failed to write binarized image to %s: %s", save_binary, e)
            return 1
        if not written:
            logger.error("Failed to write binarized image to %s", save_binary)
            return 1
        logger.info("Binarized image written to %s", save_binary)

    if not result.ok:
        logger.error("%s", result.error)
        return 1

    print(result.text)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = load_config(args.config)
    if args.threshold is not None:
        config["binarize"]["threshold"] = args.threshold

    if args.image:
        return run_headless(config, args.image, save_binary=args.save_binary)

    from digitcam.ui.app import DigitCamApplication

    return DigitCamApplication(config).run()


if __name__ == "__main__":
    sys.exit(main())
