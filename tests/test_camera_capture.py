"""Tests for camera capture and image loading."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import cv2
import numpy as np
import pytest

from digitcam.capture.camera_capture import CameraCapture, CaptureError, load_captured_image


def _fake_camera(frame: np.ndarray | None, opened: bool = True) -> MagicMock:
    cam = MagicMock()
    cam.isOpened.return_value = opened
    cam.read.return_value = (frame is not None, frame)
    return cam


def _frame() -> np.ndarray:
    img = np.zeros((30, 40, 3), dtype=np.uint8)
    img[:, 20:] = (255, 255, 255)
    return img


class TestCameraCapture:
    def test_writes_frame_to_output_path(self, tmp_path: Path):
        out = tmp_path / "sub" / "tmp_ocr.png"
        cam = _fake_camera(_frame())
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            path = CameraCapture(output_path=out, warmup_frames=2).capture()

        assert path == out
        assert out.exists()
        loaded = cv2.imread(str(out))
        assert loaded.shape == (30, 40, 3)
        cam.release.assert_called_once()

    def test_discards_warmup_frames(self, tmp_path: Path):
        cam = _fake_camera(_frame())
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            CameraCapture(output_path=tmp_path / "a.png", warmup_frames=3).capture()
        assert cam.read.call_count == 4

    def test_uses_device_index(self, tmp_path: Path):
        cam = _fake_camera(_frame())
        with patch(
            "digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam
        ) as mock_cls:
            CameraCapture(device_index=2, output_path=tmp_path / "a.png").capture()
        mock_cls.assert_called_once_with(2)

    def test_unopened_camera_raises(self, tmp_path: Path):
        cam = _fake_camera(None, opened=False)
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            with pytest.raises(CaptureError):
                CameraCapture(output_path=tmp_path / "a.png").capture()
        cam.release.assert_called_once()

    def test_failed_read_raises(self, tmp_path: Path):
        cam = _fake_camera(None)
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            with pytest.raises(CaptureError):
                CameraCapture(output_path=tmp_path / "a.png", warmup_frames=0).capture()
        assert not (tmp_path / "a.png").exists()

    def test_parent_is_a_file_raises_capture_error(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        cam = _fake_camera(_frame())
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            with pytest.raises(CaptureError, match="Failed to write"):
                CameraCapture(output_path=blocker / "tmp_ocr.jpg", warmup_frames=0).capture()

    def test_unwritable_extension_raises_capture_error(self, tmp_path: Path):
        cam = _fake_camera(_frame())
        with patch("digitcam.capture.camera_capture.cv2.VideoCapture", return_value=cam):
            with pytest.raises(CaptureError, match="Failed to write"):
                CameraCapture(output_path=tmp_path / "tmp_ocr", warmup_frames=0).capture()


class TestLoadCapturedImage:
    def test_loads_written_image(self, tmp_path: Path):
        path = tmp_path / "photo.png"
        cv2.imwrite(str(path), _frame())
        image = load_captured_image(path)
        assert image.shape == (30, 40, 3)
        np.testing.assert_array_equal(image, _frame())

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(CaptureError, match="not found"):
            load_captured_image(tmp_path / "nope.jpg")

    def test_undecodable_file_raises(self, tmp_path: Path):
        path = tmp_path / "broken.jpg"
        path.write_bytes(b"not an image")
        with pytest.raises(CaptureError, match="decode"):
            load_captured_image(path)
