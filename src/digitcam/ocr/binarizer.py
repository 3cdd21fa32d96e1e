"""Global-threshold binarization on the unweighted channel average."""

import numpy as np

BLACK = 0
WHITE = 255


def channel_average(image: np.ndarray) -> np.ndarray:
    """Return the integer mean of the colour channels for each pixel.

    Alpha, if present, is ignored. A 2-D image is treated as grayscale and
    returned as-is (widened so callers can compare against any int).

    Raises:
        ValueError: If the image has invalid dimensions.
    """
    if image is None:
        raise ValueError("Input image is None.")

    image = np.asarray(image)
    if image.ndim == 2:
        if image.size == 0:
            raise ValueError(f"Input image is empty: shape {image.shape}")
        return image.astype(np.int32)

    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(
            f"Expected an (H, W), (H, W, 3) or (H, W, 4) image, got shape {image.shape}"
        )
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError(f"Input image is empty: shape {image.shape}")

    # Channel order does not matter for an unweighted mean
    channels = image[:, :, :3].astype(np.int32)
    return channels.sum(axis=2) // 3


def binarize_image(image: np.ndarray, threshold: int) -> np.ndarray:
    """Convert an image to pure black and white.

    A pixel becomes black when ``(r + g + b) // 3 < threshold`` and white
    otherwise. Threshold 0 therefore yields an all-white image and 256 an
    all-black one.

    Args:
        image: BGR (H, W, 3), BGRA (H, W, 4) or grayscale (H, W) uint8 image.
        threshold: Intensity below which a pixel is considered ink.

    Returns:
        New opaque (H, W, 3) uint8 image containing only 0 and 255.
    """
    gray = channel_average(image)

    h, w = gray.shape
    binary = np.full((h, w, 3), WHITE, dtype=np.uint8)
    binary[gray < threshold] = BLACK
    return binary
