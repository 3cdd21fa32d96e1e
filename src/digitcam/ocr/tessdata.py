"""First-run bootstrap of the Tesseract trained data."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ASSETS_DIR = Path(__file__).parent.parent / "assets"

# Copy buffer size in bytes
_CHUNK_SIZE = 1024


class TrainedDataError(Exception):
    """Raised when the trained data cannot be installed."""


def tessdata_dir(learn_data_dir: Path) -> Path:
    """Directory Tesseract reads ``<lang>.traineddata`` from."""
    return Path(learn_data_dir) / "tessdata"


def bundled_asset_path(language: str, assets_dir: Path = DEFAULT_ASSETS_DIR) -> Path:
    return Path(assets_dir) / f"{language}.traineddata"


def ensure_trained_data(
    learn_data_dir: Path,
    asset_path: Path | None = None,
    language: str = "jpn",
) -> Path:
    """Make sure ``<learn_data_dir>/tessdata/<language>.traineddata`` exists.

    The asset is only copied when the target is missing; an existing file
    is left untouched.

    Args:
        learn_data_dir: Writable directory that will hold ``tessdata/``.
        asset_path: Bundled trained data to copy. Defaults to the package asset.
        language: Tesseract language code.

    Returns:
        Path to the installed trained-data file.

    Raises:
        TrainedDataError: If the asset is missing or the copy fails.
    """
    target_dir = tessdata_dir(learn_data_dir)
    target = target_dir / f"{language}.traineddata"

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TrainedDataError(f"Cannot create {target_dir}: {e}") from e

    if target.exists():
        logger.debug("Trained data already installed: %s", target)
        return target

    source = Path(asset_path) if asset_path else bundled_asset_path(language)
    if not source.is_file():
        raise TrainedDataError(f"Trained data asset not found: {source}")

    logger.info("Copying trained data %s -> %s", source, target)
    try:
        with open(source, "rb") as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst, _CHUNK_SIZE)
    except OSError as e:
        # Don't leave a truncated file that would be mistaken for a valid install
        target.unlink(missing_ok=True)
        raise TrainedDataError(f"Failed to copy trained data: {e}") from e

    return target
